# SPDX-License-Identifier: AGPL-3.0-only

"""
Error taxonomy shared by the Explain, Mind Map and Random Topic tools.

Every error carries the HTTP status the API layer should answer with and a
stable, user-safe message. Internal detail stays in ``str(error)``.
"""

from typing import Any, Dict, Optional


class ExplainerError(Exception):
    """Base class for all service errors."""

    status_code = 500
    user_message = "Something went wrong. Please try again."

    def __init__(self, message: str = "", details: Optional[Any] = None):
        super().__init__(message or self.user_message)
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.user_message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InputValidationError(ExplainerError):
    """A required request field is missing or malformed."""

    status_code = 400

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, details)
        # Validation messages are reported verbatim
        self.user_message = message


class NoResponseError(ExplainerError):
    """The generation service returned no usable text."""

    status_code = 503
    user_message = "AI model temporarily unavailable. Please try again."


class ParseExhaustionError(ExplainerError):
    """All tagged-section strategies yielded zero sections."""

    user_message = "Could not split the explanation into sections."


class JSONExtractionError(ExplainerError):
    """A single topic attempt produced unusable JSON."""

    user_message = "Could not read the generated topic."


class GenerationError(ExplainerError):
    """Bounded retries were exhausted."""

    user_message = "Failed to generate random topic. Please try again."

    def __init__(self, message: str):
        # The last underlying failure is surfaced to the caller as ``details``
        super().__init__(message, details=message)
