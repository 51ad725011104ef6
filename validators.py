# SPDX-License-Identifier: AGPL-3.0-only

"""
Input validation schemas using Marshmallow for API endpoints.
"""
from marshmallow import Schema, fields, validate, post_load, EXCLUDE, ValidationError

from common.errors import InputValidationError
from explain.prompt_pack import normalize_knowledge_level, normalize_mode


class ConversationTurnSchema(Schema):
    """One previous question or answer in a follow-up conversation."""
    kind = fields.Str(
        data_key="type",
        required=True,
        validate=validate.OneOf(["question", "answer"]),
        error_messages={'required': 'Conversation turn type is required'}
    )
    content = fields.Str(required=True, error_messages={'required': 'Conversation turn content is required'})

    class Meta:
        unknown = EXCLUDE


class ExplainRequestSchema(Schema):
    """Validation schema for explain requests."""
    topic = fields.Str(
        required=True,
        validate=validate.Length(min=1),
        error_messages={
            'required': 'Topic field is required',
            'invalid': 'Topic must be a string'
        }
    )
    audience = fields.Str(
        required=True,
        validate=validate.Length(min=1),
        error_messages={
            'required': 'Audience field is required',
            'invalid': 'Audience must be a string'
        }
    )
    # Unknown modes and levels are not errors; they fall back in post_load
    mode = fields.Str(required=False, allow_none=True, load_default='default')
    knowledge_level = fields.Str(
        data_key="knowledgeLevel",
        required=False,
        allow_none=True,
        load_default='beginner'
    )
    original_explanation = fields.Str(data_key="originalExplanation", required=False, allow_none=True)
    conversation_history = fields.List(
        fields.Nested(ConversationTurnSchema),
        data_key="conversationHistory",
        required=False,
        allow_none=True,
        load_default=list
    )
    follow_up_question = fields.Str(data_key="followUpQuestion", required=False, allow_none=True)

    class Meta:
        unknown = EXCLUDE

    @post_load
    def apply_defaults(self, data, **kwargs):
        data["mode"] = normalize_mode(data.get("mode") or "default")
        data["knowledge_level"] = normalize_knowledge_level(data.get("knowledge_level") or "beginner")
        data["conversation_history"] = data.get("conversation_history") or []
        return data


class MindMapRequestSchema(Schema):
    """Validation schema for mind map requests."""
    explanation = fields.Str(
        required=True,
        validate=validate.Length(min=1),
        error_messages={'required': 'Explanation field is required'}
    )
    topic = fields.Str(
        required=True,
        validate=validate.Length(min=1),
        error_messages={'required': 'Topic field is required'}
    )

    class Meta:
        unknown = EXCLUDE


INVALID_REQUEST_MESSAGE = "Invalid request"


def required_keys(schema: Schema) -> set:
    """Payload keys of the schema's required fields."""
    return {field.data_key or name for name, field in schema.fields.items() if field.required}


def load_request(schema: Schema, payload, message: str) -> dict:
    """
    Validate a JSON payload.

    ``message`` is reported when a required field is missing or invalid;
    failures confined to optional fields get a generic message. Field-level
    errors are attached as details either way.
    """
    if not isinstance(payload, dict):
        raise InputValidationError(message, details={"_schema": ["Request body must be a JSON object"]})
    try:
        return schema.load(payload)
    except ValidationError as e:
        failed = set(e.messages) if isinstance(e.messages, dict) else set()
        headline = message if (failed & required_keys(schema)) or not failed else INVALID_REQUEST_MESSAGE
        raise InputValidationError(headline, details=e.messages) from e
