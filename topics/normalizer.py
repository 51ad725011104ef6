# SPDX-License-Identifier: AGPL-3.0-only

"""
Response normalization for Random Topic outputs.
"""
import json
import re
from typing import Dict, Any

from pydantic import ValidationError

from common.errors import JSONExtractionError
from common.models import TopicAudiencePair

# Greedy: first "{" to last "}"
JSON_OBJECT_PATTERN = re.compile(r'\{.*\}', re.DOTALL)


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the JSON object embedded in a model reply.

    Prose before the first ``{`` and after the last ``}`` is ignored. Raises
    JSONExtractionError if the span is not a JSON object.
    """
    cleaned = (text or '').strip()
    match = JSON_OBJECT_PATTERN.search(cleaned)
    if match:
        cleaned = match.group(0)

    try:
        parsed = json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError) as e:
        raise JSONExtractionError(f"Invalid JSON in response: {e}") from e

    if not isinstance(parsed, dict):
        raise JSONExtractionError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def parse_topic_pair(text: str) -> TopicAudiencePair:
    """Extract and validate a {topic, audience} pair."""
    parsed = extract_json_object(text)
    try:
        return TopicAudiencePair(topic=parsed.get("topic"), audience=parsed.get("audience"))
    except ValidationError as e:
        raise JSONExtractionError(
            f"Invalid response format: missing topic or audience. Got: {json.dumps(parsed)}"
        ) from e
