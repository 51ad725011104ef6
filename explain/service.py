# SPDX-License-Identifier: AGPL-3.0-only

"""
Explain service orchestrator: generates an explanation and follow-up
suggestions, then normalizes both.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, List

from common.errors import NoResponseError, ParseExhaustionError
from common.llm_client import LLMClient
from common.metrics import RequestMetrics
from explain.normalizer import clean_response, extract_suggestions
from explain.prompt_pack import (
    EXPLAIN_PARAMS,
    EXPLAIN_SYSTEM_PROMPT,
    SUGGESTIONS_PARAMS,
    SUGGESTIONS_SYSTEM_PROMPT,
    build_explain_prompt,
    build_suggestions_prompt,
    normalize_mode,
)
from explain.sections import fallback_text, require_sections

logger = logging.getLogger(__name__)


class ExplainService:
    """Service to explain a topic for a given audience."""

    def __init__(self, llm_client: LLMClient = None):
        self.llm_client = llm_client or LLMClient()

    def process(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Main processing pipeline.

        Args:
            params: validated request fields (see validators.ExplainRequestSchema)

        Returns:
            {explanation, suggestions} plus {sections, fallbackText} in step-by-step mode
        """
        metrics = RequestMetrics("explain")
        mode = normalize_mode(params.get("mode", "default"))

        prompt = build_explain_prompt(params)
        metrics.mark_stage("prompt_built")

        # Follow-up turns never ask for new suggestions
        with ThreadPoolExecutor(max_workers=2) as executor:
            explanation_future = executor.submit(
                self.llm_client.generate, EXPLAIN_SYSTEM_PROMPT, prompt, EXPLAIN_PARAMS
            )
            suggestions_future = None
            if mode != "qa-followup":
                suggestions_future = executor.submit(
                    self.generate_suggestions, params["topic"], params["audience"]
                )

            suggestions = suggestions_future.result() if suggestions_future else []
            raw_explanation = explanation_future.result()

        metrics.add_llm_call()
        if suggestions_future:
            metrics.add_llm_call()
        metrics.mark_stage("llm_done")

        explanation = clean_response(raw_explanation)
        if not explanation:
            raise NoResponseError("No valid explanation generated after filtering")
        metrics.mark_stage("normalization_done")

        result: Dict[str, Any] = {
            "explanation": explanation,
            "suggestions": suggestions,
        }

        if mode == "step-by-step":
            try:
                sections = require_sections(explanation)
                result["sections"] = [s.to_dict() for s in sections]
                result["fallbackText"] = None
            except ParseExhaustionError:
                logger.info("No sections recognised, falling back to whole-text display")
                metrics.add_error("parse_exhausted")
                result["sections"] = []
                result["fallbackText"] = fallback_text(explanation)
            metrics.mark_stage("sections_done")

        metrics.finish()
        logger.info(
            "Explanation ready: mode=%s length=%d suggestions=%d",
            mode, len(explanation), len(suggestions)
        )
        logger.debug("Explain metrics: %s", metrics.to_dict())
        return result

    def generate_suggestions(self, topic: str, audience: str) -> List[str]:
        """Six related topics, or an empty list if generation fails."""
        try:
            raw = self.llm_client.generate(
                SUGGESTIONS_SYSTEM_PROMPT, build_suggestions_prompt(topic, audience), SUGGESTIONS_PARAMS
            )
        except NoResponseError as e:
            logger.warning("Suggestion generation failed: %s", e)
            return []
        return extract_suggestions(raw)
