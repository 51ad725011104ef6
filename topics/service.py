# SPDX-License-Identifier: AGPL-3.0-only

"""
Random topic service: asks the model for a {topic, audience} pair, retrying a
bounded number of times with a fixed pause between attempts.
"""
import logging
import time
from typing import Dict, Any

from common.config import config as default_config
from common.errors import GenerationError, JSONExtractionError, NoResponseError
from common.llm_client import LLMClient
from common.metrics import RequestMetrics
from common.models import TopicAudiencePair
from topics.normalizer import parse_topic_pair
from topics.prompt_pack import TOPIC_PARAMS, TOPIC_PROMPT

logger = logging.getLogger(__name__)


class TopicService:
    """Service to suggest a random topic and audience."""

    def __init__(self, llm_client: LLMClient = None, retry_delay: float = None, max_attempts: int = None):
        self.llm_client = llm_client or LLMClient()
        self.retry_delay = default_config.topic_retry_delay if retry_delay is None else retry_delay
        self.max_attempts = default_config.topic_max_attempts if max_attempts is None else max_attempts

    def generate_topic_pair(self, max_attempts: int = None) -> TopicAudiencePair:
        """
        Generate a topic/audience pair.

        Attempts run one after another; a failed attempt is followed by a fixed
        ``retry_delay`` pause unless it was the last. Raises GenerationError
        carrying the last failure once ``max_attempts`` attempts have failed.
        """
        if max_attempts is None:
            max_attempts = self.max_attempts
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        metrics = RequestMetrics("random_topic")
        last_error = None

        for attempt in range(1, max_attempts + 1):
            logger.info("Random topic generation attempt %d/%d", attempt, max_attempts)
            try:
                metrics.add_llm_call()
                raw = self.llm_client.generate("", TOPIC_PROMPT, TOPIC_PARAMS)
                pair = parse_topic_pair(raw)
                metrics.finish()
                logger.info("Generated topic on attempt %d: %s", attempt, pair.topic)
                logger.debug("Random topic metrics: %s", metrics.to_dict())
                return pair
            except (NoResponseError, JSONExtractionError) as e:
                last_error = e
                metrics.add_error(str(e))
                logger.warning("Attempt %d failed: %s", attempt, e)

            if attempt < max_attempts:
                time.sleep(self.retry_delay)

        metrics.finish()
        logger.debug("Random topic metrics: %s", metrics.to_dict())
        raise GenerationError(
            f"Failed to generate topic after {max_attempts} attempts. Last error: {last_error}"
        )

    def process(self) -> Dict[str, Any]:
        """Endpoint payload: {topic, audience}."""
        return self.generate_topic_pair().model_dump()
