# SPDX-License-Identifier: AGPL-3.0-only

"""
Per-request metrics for the explainer services.
"""
import time
from typing import Dict, Any
from datetime import datetime


class RequestMetrics:
    """Track timings, generation calls and errors for one request."""

    def __init__(self, operation: str):
        self.operation = operation
        self.start_time = time.time()
        self.end_time = None
        self.stages: Dict[str, float] = {}
        self.llm_calls = 0
        self.errors = []

    def mark_stage(self, stage_name: str):
        """Mark completion of a stage."""
        self.stages[stage_name] = time.time()

    def finish(self):
        """Mark request as finished."""
        self.end_time = time.time()

    def add_llm_call(self):
        """Record a generation call."""
        self.llm_calls += 1

    def add_error(self, error: str):
        """Record an error."""
        self.errors.append(error)

    def duration(self) -> float:
        """Get total duration in seconds."""
        if self.end_time:
            return self.end_time - self.start_time
        return time.time() - self.start_time

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dict."""
        return {
            "operation": self.operation,
            "duration_seconds": round(self.duration(), 3),
            "llm_calls": self.llm_calls,
            "stages": {k: round(v - self.start_time, 3) for k, v in self.stages.items()},
            "errors": self.errors,
            "start_time": datetime.fromtimestamp(self.start_time).isoformat(),
            "end_time": datetime.fromtimestamp(self.end_time).isoformat() if self.end_time else None
        }
