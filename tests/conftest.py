# SPDX-License-Identifier: AGPL-3.0-only

"""
Pytest configuration and fixtures.

This module provides shared fixtures and configuration for all tests.
"""

import pytest
from unittest.mock import Mock

from common.config import ExplainerConfig
from common.llm_client import LLMClient
from explain.service import ExplainService
from mindmap.service import MindMapService
from topics.service import TopicService


@pytest.fixture
def settings():
    """Settings that never touch the environment."""
    return ExplainerConfig(
        llm_provider="groq",
        groq_api_key="test-key",
        topic_retry_delay=0,
        _env_file=None,
    )


@pytest.fixture
def mock_llm_client():
    """LLM client double; set return_value / side_effect per test."""
    return Mock(spec=LLMClient)


@pytest.fixture
def step_by_step_reply():
    """A well-formed step-by-step completion."""
    return """<think>The user wants steps.</think>
INTRO_START
Rainbows appear when sunlight meets raindrops.
INTRO_END

STEP1_START
Step 1: Light enters the drop
Sunlight bends as it enters each raindrop.
STEP1_END

STEP2_START
Step 2: Colours split
Each colour bends by a **different** amount.
STEP2_END

SUMMARY_START
Bending and reflection make the arc.
SUMMARY_END"""


@pytest.fixture
def suggestions_reply():
    """A messy one-per-line suggestions completion."""
    return """1. Light Refraction
- Prism Experiments
• Weather Patterns
Let me think about more
<b>Optics</b>
2023
Colour Vision
Double Rainbows
Sunset Colours"""


@pytest.fixture
def explain_service(mock_llm_client):
    return ExplainService(llm_client=mock_llm_client)


@pytest.fixture
def mindmap_service(mock_llm_client):
    return MindMapService(llm_client=mock_llm_client)


@pytest.fixture
def topic_service(mock_llm_client):
    return TopicService(llm_client=mock_llm_client, retry_delay=0, max_attempts=3)


@pytest.fixture
def app(explain_service, mindmap_service, topic_service):
    """Flask app wired to the mocked services."""
    from app import create_app
    flask_app = create_app(
        explain_service=explain_service,
        mindmap_service=mindmap_service,
        topic_service=topic_service,
    )
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection."""
    # Endpoint tests exercise the whole Flask stack
    for item in items:
        if "test_endpoints" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
