# SPDX-License-Identifier: AGPL-3.0-only

"""
LLM client wrapper with timeouts and provider abstraction.

The client makes exactly one request per call. Retrying is the caller's
business (see ``topics.service``).
"""
import logging
from typing import Optional, Dict, Any, List

import requests

from common.config import config as default_config
from common.errors import NoResponseError
from common.models import GenerationParams

logger = logging.getLogger(__name__)


class LLMClient:
    """Unified client for chat-completion providers (Groq, OpenAI, local Ollama)."""

    def __init__(self, provider: str = None, model: str = None, timeout: int = None, settings=None):
        settings = settings or default_config
        llm_config = settings.get_llm_config()

        self.provider = (provider or llm_config["provider"]).lower()
        self.model = model or llm_config["model"]
        self.timeout = timeout or llm_config["timeout"]
        self.api_key = llm_config["api_key"]
        self.base_url = llm_config["base_url"].rstrip("/")

    def generate(self, system_prompt: str, user_prompt: str, params: Optional[GenerationParams] = None) -> str:
        """
        Run one chat completion.

        Returns the completion text. Raises NoResponseError when the provider
        cannot be reached, answers with an error status, or returns no text.
        """
        if self.provider in ("groq", "openai"):
            call = self._call_chat_completions
        elif self.provider == "ollama":
            call = self._call_ollama
        else:
            raise ValueError(f"Unknown provider: {self.provider}")

        params = params or GenerationParams()
        messages = self._build_messages(system_prompt, user_prompt)

        try:
            text = call(messages, params)
        except requests.RequestException as e:
            logger.error("%s request failed: %s", self.provider, e)
            raise NoResponseError(f"{self.provider} request failed: {e}") from e
        except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
            logger.error("Unexpected %s response shape: %s", self.provider, e)
            raise NoResponseError(f"Malformed {self.provider} response: {e}") from e

        if not text or not text.strip():
            raise NoResponseError("No response from AI")
        return text

    @staticmethod
    def _build_messages(system_prompt: str, user_prompt: str) -> List[Dict[str, str]]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})
        return messages

    def _call_chat_completions(self, messages: List[Dict[str, str]], params: GenerationParams) -> str:
        """Call an OpenAI-compatible chat completions endpoint (Groq, OpenAI)."""
        if not self.api_key:
            raise NoResponseError(f"API key for {self.provider} not set")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }

        payload = {"model": self.model, "messages": messages}
        payload.update(params.to_payload())

        resp = requests.post(
            f"{self.base_url}/chat/completions",
            headers=headers,
            json=payload,
            timeout=self.timeout
        )
        resp.raise_for_status()
        data = resp.json()

        choices = data.get("choices") or []
        if not choices:
            return ""
        return (choices[0].get("message") or {}).get("content") or ""

    def _call_ollama(self, messages: List[Dict[str, str]], params: GenerationParams) -> str:
        """Call local Ollama instance."""
        sampling = params.to_payload()
        options: Dict[str, Any] = {
            "num_predict": sampling.pop("max_tokens"),
            "temperature": sampling.pop("temperature"),
        }
        options.update(sampling)

        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": options
        }

        resp = requests.post(
            f"{self.base_url}/api/chat",
            json=payload,
            timeout=self.timeout
        )
        resp.raise_for_status()
        data = resp.json()

        return (data.get("message") or {}).get("content") or ""
