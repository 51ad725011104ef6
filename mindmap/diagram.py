# SPDX-License-Identifier: AGPL-3.0-only

"""
Mermaid diagram extraction for mind map outputs.
"""
import logging
import re

logger = logging.getLogger(__name__)

MERMAID_BLOCK_PATTERN = re.compile(r'```mermaid\s*(.*?)\s*```', re.IGNORECASE | re.DOTALL)
ROOT_KEYWORD = "flowchart"

DEFAULT_DIAGRAM_TEMPLATE = """flowchart TB
    A[{topic}] --> B[Key Concepts]
    A --> C[Applications]
    A --> D[Benefits]
    B --> E[Concept 1]
    B --> F[Concept 2]
    C --> G[Use Case 1]
    C --> H[Use Case 2]
    D --> I[Advantage 1]
    D --> J[Advantage 2]"""


def default_diagram(topic_label: str) -> str:
    """Fixed three-branch mind map rooted at ``topic_label``."""
    return DEFAULT_DIAGRAM_TEMPLATE.format(topic=topic_label)


def extract_diagram(raw_text: str, topic_label: str) -> str:
    """
    Pull a flowchart out of a model reply.

    A fenced ```mermaid block is preferred; otherwise the whole reply is the
    candidate. Anything without a ``flowchart`` declaration is replaced by
    ``default_diagram(topic_label)``, so this never fails.
    """
    cleaned = (raw_text or '').strip()

    match = MERMAID_BLOCK_PATTERN.search(cleaned)
    candidate = match.group(1).strip() if match else cleaned

    if ROOT_KEYWORD in candidate:
        return candidate

    logger.warning("Reply has no %s diagram, using default mind map", ROOT_KEYWORD)
    return default_diagram(topic_label)
