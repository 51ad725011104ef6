# SPDX-License-Identifier: AGPL-3.0-only

"""
Flask endpoints for the Explain tool.
"""
import logging
from flask import request, jsonify

from explain.service import ExplainService
from validators import ExplainRequestSchema, load_request

logger = logging.getLogger(__name__)

explain_schema = ExplainRequestSchema()


def register_explain_endpoints(app, service: ExplainService = None):
    """Register Explain endpoints with Flask app."""
    service = service or ExplainService()

    @app.post("/api/explain")
    def explain():
        """Explain a topic; returns {explanation, suggestions}."""
        params = load_request(
            explain_schema,
            request.get_json(silent=True),
            "Topic and audience are required"
        )
        logger.info("Explain request: mode=%s level=%s", params["mode"], params["knowledge_level"])
        return jsonify(service.process(params))
