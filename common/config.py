# SPDX-License-Identifier: AGPL-3.0-only

"""
Configuration service for the explainer backend.

Settings are read from ``EXPLAINER_*`` environment variables (a ``.env`` file
is loaded by ``app.py``). Provider API keys are also accepted under their
usual bare names.
"""

from typing import Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class ExplainerConfig(BaseSettings):
    """Configuration settings for the explainer backend."""

    # LLM provider settings
    llm_provider: str = Field(default="groq", description="LLM provider (groq, openai, ollama)")
    llm_timeout: int = Field(default=60, description="LLM request timeout in seconds")

    # Groq settings
    groq_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("EXPLAINER_GROQ_API_KEY", "GROQ_API_KEY"),
        description="Groq API key",
    )
    groq_model: str = Field(default="llama-3.3-70b-versatile", description="Groq model name")
    groq_base_url: str = Field(default="https://api.groq.com/openai/v1", description="Groq API base URL")

    # OpenAI settings
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("EXPLAINER_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="OpenAI API key",
    )
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model name")
    openai_base_url: str = Field(default="https://api.openai.com/v1", description="OpenAI API base URL")

    # Ollama settings
    ollama_base_url: str = Field(default="http://localhost:11434", description="Ollama base URL")
    ollama_model: str = Field(default="llama3.1:8b", description="Ollama model name")

    # Random topic retry loop
    topic_max_attempts: int = Field(default=3, ge=1, description="Attempts before giving up on a random topic")
    topic_retry_delay: float = Field(default=1.0, ge=0, description="Fixed pause between topic attempts (seconds)")

    # Server settings
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: str = Field(default="*", description="Comma-separated allowed CORS origins")
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8000, description="Bind port")

    class Config:
        env_prefix = "EXPLAINER_"
        case_sensitive = False
        populate_by_name = True

    def get_llm_config(self) -> dict:
        """Get the settings of the active LLM provider."""
        provider = self.llm_provider.lower()
        if provider == "groq":
            return {
                "provider": provider,
                "api_key": self.groq_api_key,
                "model": self.groq_model,
                "base_url": self.groq_base_url,
                "timeout": self.llm_timeout,
            }
        if provider == "openai":
            return {
                "provider": provider,
                "api_key": self.openai_api_key,
                "model": self.openai_model,
                "base_url": self.openai_base_url,
                "timeout": self.llm_timeout,
            }
        return {
            "provider": provider,
            "api_key": None,
            "model": self.ollama_model,
            "base_url": self.ollama_base_url,
            "timeout": self.llm_timeout,
        }

    def validate_llm_config(self) -> bool:
        """Validate LLM configuration."""
        provider = self.llm_provider.lower()
        if provider not in ("groq", "openai", "ollama"):
            return False
        if provider == "groq" and not self.groq_api_key:
            return False
        if provider == "openai" and not self.openai_api_key:
            return False
        return True

    def get_cors_origins(self) -> list:
        """Split the configured CORS origins."""
        origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        return origins or ["*"]


# Global configuration instance
config = ExplainerConfig()
