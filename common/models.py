# SPDX-License-Identifier: AGPL-3.0-only

"""
Pydantic models for the explainer backend.

These are the structured shapes recovered from free-form model output, plus the
generation parameters forwarded to the provider untouched.
"""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, field_validator


class SectionKind(str, Enum):
    """Kinds of section in a step-by-step explanation."""
    INTRO = "INTRO"
    STEP = "STEP"
    SUMMARY = "SUMMARY"


class Section(BaseModel):
    """A tagged chunk of a step-by-step explanation."""
    kind: SectionKind = Field(description="Section kind")
    number: Optional[int] = Field(None, description="STEP label as written in the source")
    body: str = Field("", description="Captured text, possibly starting with a title line")
    title: Optional[str] = Field(None, description="Step title, when the strategy recognises one")
    content: str = Field("", description="Body with residual markers removed")

    @property
    def label(self) -> str:
        """Display label such as INTRO, STEP2 or SUMMARY."""
        if self.kind == SectionKind.STEP:
            return f"STEP{self.number}"
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {"type": self.label, "content": self.content}
        if self.title is not None:
            data["title"] = self.title
        return data


class TopicAudiencePair(BaseModel):
    """A generated topic together with a matching audience."""
    topic: str = Field(description="Topic to explain")
    audience: str = Field(description="Audience descriptor")

    @field_validator("topic", "audience")
    @classmethod
    def validate_not_blank(cls, v):
        """Both fields must carry text."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class GenerationParams(BaseModel):
    """Sampling knobs forwarded verbatim to the generation service."""
    temperature: float = Field(0.6, ge=0, le=2, description="Sampling temperature")
    max_tokens: int = Field(1000, gt=0, description="Maximum output tokens")
    top_p: Optional[float] = Field(None, ge=0, le=1, description="Nucleus sampling cutoff")
    frequency_penalty: Optional[float] = Field(None, description="Frequency penalty")
    presence_penalty: Optional[float] = Field(None, description="Presence penalty")

    def to_payload(self) -> Dict[str, Any]:
        """Parameters that were actually set."""
        return self.model_dump(exclude_none=True)
