#!/usr/bin/env python3
# SPDX-License-Identifier: AGPL-3.0-only
"""
Startup script for the Explainer backend: checks the LLM provider before
starting the Flask server.
"""

import logging
import sys

import requests

from app import create_app
from common.config import config

logger = logging.getLogger("start_backend")


def check_provider() -> bool:
    """Check that the configured LLM provider is usable."""
    llm = config.get_llm_config()
    provider = llm["provider"]

    if not config.validate_llm_config():
        logger.error("LLM provider '%s' is not configured (missing API key or unknown provider)", provider)
        return False

    if provider != "ollama":
        logger.info("Using %s model %s", provider, llm["model"])
        return True

    try:
        response = requests.get(f"{llm['base_url']}/api/tags", timeout=5)
    except requests.exceptions.ConnectionError:
        logger.error("Ollama service is not running at %s", llm["base_url"])
        return False

    if response.status_code != 200:
        logger.error("Ollama service responded with status %s", response.status_code)
        return False

    models = [m["name"] for m in response.json().get("models", [])]
    if llm["model"] not in models:
        logger.warning("Model %s not installed. Run 'ollama pull %s'.", llm["model"], llm["model"])
    else:
        logger.info("Ollama is running with %s", llm["model"])
    return True


def main():
    app = create_app()
    logger.info("Starting Explainer backend...")

    if not check_provider():
        logger.error("Explanations will not work until the LLM provider is configured.")
        sys.exit(1)

    logger.info("Health check: http://%s:%s/health", config.host, config.port)
    try:
        app.run(host=config.host, port=config.port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user.")


if __name__ == "__main__":
    main()
