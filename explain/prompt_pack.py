# SPDX-License-Identifier: AGPL-3.0-only

"""
Mode- and level-specific prompt packs for the Explain tool.
"""
from typing import Any, Dict, List

from common.models import GenerationParams


EXPLAIN_SYSTEM_PROMPT = (
    "You are an expert educator who adapts explanations to different knowledge levels and formats. "
    "You never use markdown, formatting, or special characters. You follow instructions exactly and "
    "give clean, well-structured explanations tailored to the audience's knowledge level."
)

SUGGESTIONS_SYSTEM_PROMPT = (
    "You are a topic suggestion generator. You respond only with topic names, one per line, "
    "with no additional text, formatting, or characters."
)

EXPLAIN_PARAMS = GenerationParams(
    temperature=0.6, max_tokens=8000, top_p=0.9, frequency_penalty=0.2, presence_penalty=0.1
)
SUGGESTIONS_PARAMS = GenerationParams(temperature=0.7, max_tokens=800, top_p=0.9)

DEFAULT_KNOWLEDGE_LEVEL = "beginner"
DEFAULT_MODE = "default"

KNOWLEDGE_LEVEL_CONTEXT = {
    "absolute-beginner": "they have never encountered this topic and need everything explained from the very basics with simple analogies.",
    "beginner": "they have minimal knowledge and need clear, simple explanations with concrete examples.",
    "some-knowledge": "they have a basic understanding but need clarification on how things work and connect.",
    "informed": "they are well-informed and want detailed explanations of mechanisms and nuances.",
    "expert": "they have extensive knowledge and want advanced insights, edge cases, and technical depth.",
}

PLAIN_TEXT_RULE = "- Write in plain text only (NO markdown, NO bold, NO bullets, NO special characters)"

STEP_TAG_TEMPLATE = """MANDATORY FORMATTING - USE THESE EXACT TAGS:
INTRO_START
Brief introduction explaining what we'll learn and why it matters.
INTRO_END

STEP1_START
Step 1: What is the basic concept?
Explanation of the fundamental concept with examples for {audience}...
STEP1_END

STEP2_START
Step 2: How does it work?
Explanation of the process or mechanism with examples...
STEP2_END

STEP3_START
Step 3: Why is it important?
Explanation of significance and applications...
STEP3_END

SUMMARY_START
Summary that ties everything together.
SUMMARY_END

Adjust the number of steps if you need more or fewer, keeping the tag names exact."""

# Per-mode prompt configuration
MODE_PROMPTS: Dict[str, Dict[str, Any]] = {
    "default": {
        "role": "You are a master educator who makes complex topics crystal clear through real-world examples.",
        "requirements": [
            "- Keep it conversational and engaging (2-4 paragraphs)",
            "- Include at least 3 specific real-world examples that {audience} encounters regularly",
            "- Use concrete analogies to familiar objects, activities, or situations",
            "- Explain any unavoidable jargon immediately",
            "- NO lists, NO numbered points, NO section headers",
        ],
        "levels": {
            "absolute-beginner": "Start with the most basic foundation concepts",
            "beginner": "Explain fundamental concepts clearly before moving to applications",
            "some-knowledge": "Build on basic understanding and explain connections and mechanisms",
            "informed": "Provide deeper insights and explain nuances and complexities",
            "expert": "Focus on advanced concepts, edge cases, and technical depth",
        },
        "closing": "Give a clear, flowing explanation that connects abstract concepts to concrete examples from {audience}'s world.",
    },
    "step-by-step": {
        "role": "You are a master educator who breaks complex topics down into clear, detailed steps.",
        "requirements": [
            "- Break the explanation into 3-6 clear, numbered steps that build on each other",
            "- Use simple language appropriate for {audience}",
            "- Include real-world examples within each step",
            "- NO section headers except the required tags, NO lists inside steps",
        ],
        "levels": {
            "absolute-beginner": "Use extremely simple language and start with the very basics",
            "beginner": "Explain each step clearly with plenty of examples",
            "some-knowledge": "Build on existing knowledge and explain how things connect",
            "informed": "Provide detailed explanations and deeper insights in each step",
            "expert": "Include technical details and advanced considerations in each step",
        },
        "closing": STEP_TAG_TEMPLATE,
    },
    "story": {
        "role": "You are a master storyteller who makes complex topics memorable through engaging narratives.",
        "requirements": [
            "- Tell one continuous story with a clear beginning, middle, and end",
            "- Use characters and situations that {audience} can relate to",
            "- Weave the educational content naturally into the narrative",
            "- NO section breaks or chapter headers",
        ],
        "levels": {
            "absolute-beginner": "Use very simple story elements and basic concepts",
            "beginner": "Include clear explanations within the narrative",
            "some-knowledge": "Build on familiar concepts and add new connections through the story",
            "informed": "Include more sophisticated story elements and deeper insights",
            "expert": "Weave complex scenarios and technical details into the narrative",
        },
        "closing": "Tell a compelling story that makes \"{topic}\" understandable and unforgettable for {audience}.",
    },
    "qa": {
        "role": "You are a master educator who writes clear, comprehensive topic summaries.",
        "requirements": [
            "- Cover all key aspects of {topic}, from basic ideas to more advanced ones",
            "- Use examples and analogies {audience} can relate to",
            "- Address common misconceptions",
            "- NO section headers, NO lists, use flowing paragraphs",
        ],
        "levels": {
            "absolute-beginner": "Start with the absolute basics and build very gradually",
            "beginner": "Explain fundamental concepts before moving to applications",
            "some-knowledge": "Build on existing understanding and explain deeper connections",
            "informed": "Provide comprehensive coverage with detailed insights",
            "expert": "Include advanced concepts, technical details, and expert-level insights",
        },
        "closing": "The reader will ask follow-up questions, so make this a solid foundation for them.",
    },
    "qa-followup": {
        "role": "You are an expert educator answering a follow-up question about a topic you already explained.",
        "requirements": [
            "- Answer the specific question while staying consistent with the original explanation",
            "- Keep the language level and example style that suits {audience}",
            "- If the question is unclear, say what you think is being asked and answer that",
            "- Keep it conversational (1-3 paragraphs)",
        ],
        "levels": {
            "absolute-beginner": "Use very simple language and basic examples",
            "beginner": "Keep explanations clear and use familiar examples",
            "some-knowledge": "Build on their existing understanding and make connections",
            "informed": "Provide more detailed insights and nuanced explanations",
            "expert": "Include technical depth and advanced considerations",
        },
        "closing": "Answer the follow-up question while staying connected to the original topic.",
    },
}

SUPPORTED_MODES = tuple(MODE_PROMPTS)
SUPPORTED_KNOWLEDGE_LEVELS = tuple(KNOWLEDGE_LEVEL_CONTEXT)


def normalize_mode(mode: str) -> str:
    """Unknown modes fall back to the default explanation."""
    return mode if mode in MODE_PROMPTS else DEFAULT_MODE


def normalize_knowledge_level(level: str) -> str:
    """Unknown levels fall back to beginner."""
    return level if level in KNOWLEDGE_LEVEL_CONTEXT else DEFAULT_KNOWLEDGE_LEVEL


def format_conversation_history(history: List[Dict[str, str]]) -> str:
    """Render previous Q/A turns as a numbered transcript."""
    if not history:
        return "No previous questions asked."
    lines = []
    for index, turn in enumerate(history, start=1):
        prefix = "Q" if turn.get("kind") == "question" else "A"
        lines.append(f"{index}. {prefix}: {turn.get('content', '')}")
    return "\n".join(lines)


def build_explain_prompt(params: Dict[str, Any]) -> str:
    """
    Build the user prompt for an explanation.

    Args:
        params: {topic, audience, mode, knowledge_level, original_explanation,
                 conversation_history, follow_up_question}
    """
    topic = params["topic"]
    audience = params["audience"]
    mode = normalize_mode(params.get("mode", DEFAULT_MODE))
    level = normalize_knowledge_level(params.get("knowledge_level", DEFAULT_KNOWLEDGE_LEVEL))

    mode_config = MODE_PROMPTS[mode]
    knowledge_context = KNOWLEDGE_LEVEL_CONTEXT[level]

    requirements = "\n".join(r.format(topic=topic, audience=audience) for r in mode_config["requirements"])
    closing = mode_config["closing"].format(topic=topic, audience=audience)

    if mode == "qa-followup":
        header = f"""{mode_config['role']}

CONTEXT:
- Original topic: "{topic}"
- Audience: {audience}
- Knowledge level: {knowledge_context}
- Follow-up question: "{params.get('follow_up_question') or ''}"

ORIGINAL EXPLANATION:
{params.get('original_explanation') or ''}

CONVERSATION HISTORY:
{format_conversation_history(params.get('conversation_history') or [])}"""
    else:
        header = f"""{mode_config['role']} Explain "{topic}" for {audience}, considering that {knowledge_context}"""

    return f"""{header}

CRITICAL REQUIREMENTS - FOLLOW EXACTLY:
{PLAIN_TEXT_RULE}
{requirements}

KNOWLEDGE LEVEL ADAPTATION:
- {mode_config['levels'][level]}

{closing}"""


def build_suggestions_prompt(topic: str, audience: str) -> str:
    """Ask for six short follow-up topics, one per line."""
    return f"""Generate exactly 6 short related topics for someone who just learned about "{topic}" explained for {audience}.

REQUIREMENTS:
- Respond ONLY with the 6 topic names, one per line
- NO numbers, NO bullets, NO extra text
- Each topic must be 2-5 words
- Make topics relevant and progressive for continued learning by {audience}"""
