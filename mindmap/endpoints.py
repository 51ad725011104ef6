# SPDX-License-Identifier: AGPL-3.0-only

"""
Flask endpoints for the Mind Map tool.
"""
from flask import request, jsonify

from mindmap.service import MindMapService
from validators import MindMapRequestSchema, load_request

mindmap_schema = MindMapRequestSchema()


def register_mindmap_endpoints(app, service: MindMapService = None):
    """Register Mind Map endpoints with Flask app."""
    service = service or MindMapService()

    @app.post("/api/mindmap")
    def mindmap():
        """Generate Mermaid source for an explanation."""
        params = load_request(
            mindmap_schema,
            request.get_json(silent=True),
            "Explanation and topic are required"
        )
        return jsonify(service.process(params))
