# SPDX-License-Identifier: AGPL-3.0-only

"""
Prompt for the Random Topic tool.
"""
from common.models import GenerationParams


# Higher randomness so consecutive requests differ
TOPIC_PARAMS = GenerationParams(temperature=0.9, max_tokens=150, top_p=0.9)

TOPIC_PROMPT = """Generate a random, interesting topic that would be great to explain in simple terms. The topic should be:

1. Fascinating and educational
2. Something people encounter or wonder about
3. Not too niche or overly technical
4. Suitable for explanation to different audiences
5. From various fields: science, technology, psychology, economics, nature, history, etc.

Also suggest an appropriate audience type for this topic.

IMPORTANT: Respond with ONLY valid JSON in this exact format:
{"topic": "A specific topic", "audience": "An appropriate audience"}

Examples:
{"topic": "Why do we dream?", "audience": "curious teenager"}
{"topic": "How does WiFi work?", "audience": "tech beginner"}
{"topic": "Why do cats purr?", "audience": "animal lover"}

Generate a completely different topic each time."""
