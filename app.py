"""
Explainer – pure API back-end

Endpoints
─────────
GET  /health             → {"status": "ok"}
POST /api/explain        → {explanation, suggestions[, sections, fallbackText]}
POST /api/mindmap        → {mermaidDiagram}
POST /api/random-topic   → {topic, audience}
(no HTML rendered; UI lives in the front-end)
"""

# SPDX-License-Identifier: AGPL-3.0-only

# ── imports ──────────────────────────────────────────────────────
import logging
import sys

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_cors import CORS                 # allow front-end origin
from werkzeug.exceptions import HTTPException

# Load environment variables from .env file before settings are read
load_dotenv()

from common.config import config
from common.errors import ExplainerError
from explain.endpoints import register_explain_endpoints
from mindmap.endpoints import register_mindmap_endpoints
from topics.endpoints import register_topic_endpoints

logger = logging.getLogger(__name__)

# Generic messages for failures that are not ExplainerErrors
ROUTE_FAILURE_MESSAGES = {
    "/api/explain": "Failed to generate explanation. Please try again.",
    "/api/mindmap": "Failed to generate mind map",
    "/api/random-topic": "Failed to generate random topic. Please try again.",
}


def configure_logging(level: str = None):
    """Root logging setup, once per process."""
    logging.basicConfig(
        level=getattr(logging, (level or config.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )


def create_app(explain_service=None, mindmap_service=None, topic_service=None) -> Flask:
    """Build the Flask app. Services can be injected (tests); otherwise they are created from config."""
    configure_logging()

    app = Flask(__name__)
    CORS(app, origins=config.get_cors_origins())

    # ── ROUTES ───────────────────────────────────────────────────
    @app.get("/")
    def root():
        """Simple root for anyone hitting the API directly."""
        return {"service": "Explainer API", "docs": "/health"}, 200

    @app.get("/health")
    def health():
        """Used by the front-end (and uptime checks) to verify API is alive."""
        return jsonify(status="ok"), 200

    register_explain_endpoints(app, explain_service)
    register_mindmap_endpoints(app, mindmap_service)
    register_topic_endpoints(app, topic_service)

    # ── ERRORS ───────────────────────────────────────────────────
    @app.errorhandler(ExplainerError)
    def handle_explainer_error(e: ExplainerError):
        if e.status_code >= 500:
            logger.error("%s on %s: %s", type(e).__name__, request.path, e)
        else:
            logger.info("%s on %s: %s", type(e).__name__, request.path, e)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        # Let Flask render its own HTTP errors (404, 405, ...)
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s", request.path)
        message = ROUTE_FAILURE_MESSAGES.get(request.path, "Internal server error")
        return jsonify(error=message), 500

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host=config.host, port=config.port)
