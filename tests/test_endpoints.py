# SPDX-License-Identifier: AGPL-3.0-only

import pytest
from unittest.mock import patch

from common.errors import NoResponseError
from explain.prompt_pack import SUGGESTIONS_PARAMS
from mindmap.diagram import default_diagram


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_unknown_route(self, client):
        assert client.get("/api/nope").status_code == 404


class TestExplainEndpoint:
    """Integration tests for /api/explain."""

    def test_explain(self, client, mock_llm_client, suggestions_reply):
        def generate(system_prompt, user_prompt, params):
            if params == SUGGESTIONS_PARAMS:
                return suggestions_reply
            return "<think>hmm</think>**Tides** follow the moon."
        mock_llm_client.generate.side_effect = generate

        response = client.post("/api/explain", json={"topic": "Tides", "audience": "sailor"})

        assert response.status_code == 200
        body = response.get_json()
        assert body["explanation"] == "Tides follow the moon."
        assert len(body["suggestions"]) == 6

    def test_step_by_step(self, client, mock_llm_client, step_by_step_reply):
        mock_llm_client.generate.side_effect = lambda s, u, p: (
            "" if p == SUGGESTIONS_PARAMS else step_by_step_reply
        )

        response = client.post("/api/explain", json={
            "topic": "Rainbows", "audience": "kid", "mode": "step-by-step"
        })

        assert response.status_code == 200
        body = response.get_json()
        assert [s["type"] for s in body["sections"]] == ["INTRO", "STEP1", "STEP2", "SUMMARY"]
        assert body["suggestions"] == []

    def test_missing_fields(self, client, mock_llm_client):
        response = client.post("/api/explain", json={"topic": "Tides"})

        assert response.status_code == 400
        assert response.get_json()["error"] == "Topic and audience are required"
        mock_llm_client.generate.assert_not_called()

    def test_non_json_body(self, client):
        response = client.post("/api/explain", data="topic=Tides", content_type="text/plain")
        assert response.status_code == 400

    def test_malformed_mode(self, client, mock_llm_client):
        response = client.post("/api/explain", json={"topic": "Tides", "audience": "sailor", "mode": 5})

        assert response.status_code == 400
        body = response.get_json()
        assert body["error"] == "Invalid request"
        assert "mode" in body["details"]
        mock_llm_client.generate.assert_not_called()

    def test_service_unavailable(self, client, mock_llm_client):
        mock_llm_client.generate.side_effect = NoResponseError("groq request failed: timeout")

        response = client.post("/api/explain", json={"topic": "Tides", "audience": "sailor"})

        assert response.status_code == 503
        assert response.get_json() == {"error": "AI model temporarily unavailable. Please try again."}

    def test_unexpected_error_is_generic(self, client, mock_llm_client):
        mock_llm_client.generate.side_effect = RuntimeError("internal detail")

        response = client.post("/api/explain", json={"topic": "Tides", "audience": "sailor"})

        assert response.status_code == 500
        body = response.get_json()
        assert body == {"error": "Failed to generate explanation. Please try again."}


class TestMindMapEndpoint:
    """Integration tests for /api/mindmap."""

    def test_mindmap(self, client, mock_llm_client):
        mock_llm_client.generate.return_value = "```mermaid\nflowchart TB\n  A[Tides] --> B[Moon]\n```"

        response = client.post("/api/mindmap", json={"explanation": "The moon pulls.", "topic": "Tides"})

        assert response.status_code == 200
        assert response.get_json() == {"mermaidDiagram": "flowchart TB\n  A[Tides] --> B[Moon]"}

    def test_mindmap_fallback(self, client, mock_llm_client):
        mock_llm_client.generate.return_value = "Sorry, no diagram."

        response = client.post("/api/mindmap", json={"explanation": "x", "topic": "Tides"})

        assert response.get_json() == {"mermaidDiagram": default_diagram("Tides")}

    def test_mindmap_missing_fields(self, client):
        response = client.post("/api/mindmap", json={"topic": "Tides"})

        assert response.status_code == 400
        assert response.get_json()["error"] == "Explanation and topic are required"


class TestRandomTopicEndpoint:
    """Integration tests for /api/random-topic."""

    def test_random_topic(self, client, mock_llm_client):
        mock_llm_client.generate.return_value = 'Sure: {"topic": "Why do cats purr?", "audience": "animal lover"}'

        response = client.post("/api/random-topic")

        assert response.status_code == 200
        assert response.get_json() == {"topic": "Why do cats purr?", "audience": "animal lover"}

    @patch("topics.service.time.sleep")
    def test_random_topic_exhausted(self, mock_sleep, client, mock_llm_client):
        mock_llm_client.generate.return_value = "no json"

        response = client.post("/api/random-topic")

        assert response.status_code == 500
        body = response.get_json()
        assert body["error"] == "Failed to generate random topic. Please try again."
        assert "after 3 attempts" in body["details"]
        assert mock_llm_client.generate.call_count == 3
