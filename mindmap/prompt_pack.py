# SPDX-License-Identifier: AGPL-3.0-only

"""
Prompt for the Mind Map tool.
"""
from common.models import GenerationParams


MINDMAP_PARAMS = GenerationParams(temperature=0.3, max_tokens=2000)


def build_mindmap_prompt(explanation: str, topic: str) -> str:
    """Ask for a mind-map style Mermaid flowchart of an explanation."""
    return f"""You are a visual diagram generator. Based on the following explanation about "{topic}", create a Mermaid flowchart that breaks the concept into its key components and relationships in a mind-map style layout.

Explanation: "{explanation}"

Structure:
1. Central topic: "{topic}"
2. Main branches: 3-6 key concepts from the explanation
3. Sub-branches: 2-4 supporting details for each main branch

Return ONLY the Mermaid flowchart in this exact format:

```mermaid
flowchart TB
    A[{topic}] --> B[Branch1]
    A --> C[Branch2]
    B --> D[Subbranch1]
    B --> E[Subbranch2]
    C --> F[Subbranch3]
```

Rules:
- Use flowchart TB (top-bottom) syntax
- Use rectangles [text] for most nodes and circles ((text)) for important concepts
- Keep labels concise (2-4 words) with no special characters
- Only return the Mermaid code block, nothing else."""
