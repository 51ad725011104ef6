# SPDX-License-Identifier: AGPL-3.0-only

import pytest

from common.errors import NoResponseError
from explain.prompt_pack import (
    EXPLAIN_PARAMS,
    SUGGESTIONS_PARAMS,
    build_explain_prompt,
    format_conversation_history,
)
from explain.service import ExplainService


def reply_by_params(explanation, suggestions):
    """Route a fake generate() call by the generation params it was given."""
    def generate(system_prompt, user_prompt, params):
        if params == SUGGESTIONS_PARAMS:
            if isinstance(suggestions, Exception):
                raise suggestions
            return suggestions
        if isinstance(explanation, Exception):
            raise explanation
        return explanation
    return generate


@pytest.fixture
def base_params():
    return {
        "topic": "Rainbows",
        "audience": "curious kid",
        "mode": "default",
        "knowledge_level": "beginner",
        "conversation_history": [],
    }


class TestExplainService:
    """Test suite for ExplainService."""

    def test_default_mode(self, explain_service, mock_llm_client, base_params, suggestions_reply):
        mock_llm_client.generate.side_effect = reply_by_params(
            "## Rainbows\n**Light** bends in *raindrops*.", suggestions_reply
        )

        result = explain_service.process(base_params)

        assert result["explanation"] == "Rainbows Light bends in raindrops."
        assert len(result["suggestions"]) == 6
        assert "sections" not in result
        assert mock_llm_client.generate.call_count == 2

    def test_explanation_params_forwarded(self, explain_service, mock_llm_client, base_params):
        mock_llm_client.generate.side_effect = reply_by_params("Text.", "A\nB")

        explain_service.process(base_params)

        used = [c.args[2] for c in mock_llm_client.generate.call_args_list]
        assert EXPLAIN_PARAMS in used
        assert SUGGESTIONS_PARAMS in used

    def test_step_by_step_sections(self, explain_service, mock_llm_client, base_params,
                                   step_by_step_reply):
        base_params["mode"] = "step-by-step"
        mock_llm_client.generate.side_effect = reply_by_params(step_by_step_reply, "A")

        result = explain_service.process(base_params)

        assert [s["type"] for s in result["sections"]] == ["INTRO", "STEP1", "STEP2", "SUMMARY"]
        assert result["sections"][0]["content"] == "Rainbows appear when sunlight meets raindrops."
        assert result["fallbackText"] is None
        assert "think" not in result["explanation"].lower()

    def test_step_by_step_degrades_to_whole_text(self, explain_service, mock_llm_client, base_params):
        base_params["mode"] = "step-by-step"
        mock_llm_client.generate.side_effect = reply_by_params("Just one flowing paragraph.", "A")

        result = explain_service.process(base_params)

        assert result["sections"] == []
        assert result["fallbackText"] == "Just one flowing paragraph."

    def test_followup_skips_suggestions(self, explain_service, mock_llm_client, base_params):
        base_params.update({
            "mode": "qa-followup",
            "original_explanation": "Rainbows are bent light.",
            "follow_up_question": "Why are they curved?",
            "conversation_history": [{"kind": "question", "content": "What colour is first?"}],
        })
        mock_llm_client.generate.return_value = "Because raindrops are round."

        result = explain_service.process(base_params)

        assert result == {"explanation": "Because raindrops are round.", "suggestions": []}
        mock_llm_client.generate.assert_called_once()
        prompt = mock_llm_client.generate.call_args.args[1]
        assert "Why are they curved?" in prompt
        assert "1. Q: What colour is first?" in prompt

    def test_suggestion_failure_is_not_fatal(self, explain_service, mock_llm_client, base_params):
        mock_llm_client.generate.side_effect = reply_by_params(
            "Light bends.", NoResponseError("No response from AI")
        )

        result = explain_service.process(base_params)

        assert result == {"explanation": "Light bends.", "suggestions": []}

    def test_no_explanation(self, explain_service, mock_llm_client, base_params):
        mock_llm_client.generate.side_effect = reply_by_params(NoResponseError("No response from AI"), "A")

        with pytest.raises(NoResponseError):
            explain_service.process(base_params)

    def test_explanation_empty_after_cleaning(self, explain_service, mock_llm_client, base_params):
        mock_llm_client.generate.side_effect = reply_by_params("<think>only reasoning</think>", "A")

        with pytest.raises(NoResponseError) as exc_info:
            explain_service.process(base_params)

        assert "after filtering" in str(exc_info.value)


class TestExplainPrompts:
    """Test suite for prompt building."""

    def test_unknown_mode_and_level_fall_back(self):
        prompt = build_explain_prompt({
            "topic": "Tides", "audience": "sailor", "mode": "haiku", "knowledge_level": "wizard"
        })
        default_prompt = build_explain_prompt({
            "topic": "Tides", "audience": "sailor", "mode": "default", "knowledge_level": "beginner"
        })
        assert prompt == default_prompt

    def test_step_by_step_prompt_asks_for_tags(self):
        prompt = build_explain_prompt({"topic": "Tides", "audience": "sailor", "mode": "step-by-step"})
        assert "INTRO_START" in prompt
        assert "SUMMARY_END" in prompt
        assert "sailor" in prompt

    def test_history_formatting(self):
        history = [
            {"kind": "question", "content": "Why?"},
            {"kind": "answer", "content": "Because."},
        ]
        assert format_conversation_history(history) == "1. Q: Why?\n2. A: Because."
        assert format_conversation_history([]) == "No previous questions asked."
