# SPDX-License-Identifier: AGPL-3.0-only

"""
Flask endpoints for the Random Topic tool.
"""
from flask import jsonify

from topics.service import TopicService


def register_topic_endpoints(app, service: TopicService = None):
    """Register Random Topic endpoints with Flask app."""
    service = service or TopicService()

    @app.post("/api/random-topic")
    def random_topic():
        """Suggest a {topic, audience} pair."""
        return jsonify(service.process())
