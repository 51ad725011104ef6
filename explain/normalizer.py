# SPDX-License-Identifier: AGPL-3.0-only

"""
Response normalization for Explain outputs.

``clean_response`` turns a raw completion into display-safe prose and
``extract_suggestions`` turns a one-per-line completion into a short list of
follow-up topics.
"""
import re
from typing import List


# Reasoning side-channels some models emit before the answer
REASONING_BLOCK_PATTERN = re.compile(
    r'<(think|thinking|internal|scratch|draft)>.*?</\1>',
    re.IGNORECASE | re.DOTALL
)
# Any tag except the section markers consumed later by explain.sections
MARKUP_TAG_PATTERN = re.compile(r'<(?!/?(?:INTRO|STEP\d+|SUMMARY)\b)[^>]*>')
BOLD_PATTERN = re.compile(r'\*\*(.*?)\*\*')
ITALIC_PATTERN = re.compile(r'\*(.*?)\*')
INLINE_CODE_PATTERN = re.compile(r'`(.*?)`')
HEADING_PATTERN = re.compile(r'#{1,6}\s*')
BLANK_LINES_PATTERN = re.compile(r'\n\s*\n\s*\n')
WHITESPACE_PATTERN = re.compile(r'\s+')

# Suggestion list cleanup
ENUMERATOR_PATTERN = re.compile(r'^\d+[.:]\s*')
BULLET_PATTERN = re.compile(r'^[-•*]\s*')
LEADING_SYMBOLS_PATTERN = re.compile(r'^[^\w\s]+')
DIGITS_ONLY_PATTERN = re.compile(r'^\d+$')

MAX_SUGGESTIONS = 6
MAX_SUGGESTION_LENGTH = 50
SUGGESTION_DENYLIST = ("think", "explain")


def _clean_once(text: str) -> str:
    text = REASONING_BLOCK_PATTERN.sub('', text)
    text = MARKUP_TAG_PATTERN.sub('', text)

    text = BOLD_PATTERN.sub(r'\1', text)
    text = ITALIC_PATTERN.sub(r'\1', text)
    text = INLINE_CODE_PATTERN.sub(r'\1', text)
    text = HEADING_PATTERN.sub('', text)

    text = BLANK_LINES_PATTERN.sub('\n\n', text)
    text = WHITESPACE_PATTERN.sub(' ', text)
    return text.strip()


def clean_response(text: str) -> str:
    """
    Strip reasoning blocks, markup and markdown from a model reply.

    The pass is repeated until nothing changes, so stripping one marker can
    never leave behind another (``clean_response`` is idempotent). Every
    repeat strictly shortens the text, which bounds the loop.
    """
    cleaned = _clean_once(text or '')
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


def _normalize_suggestion(line: str) -> str:
    line = line.strip()
    line = ENUMERATOR_PATTERN.sub('', line)
    line = BULLET_PATTERN.sub('', line)
    line = LEADING_SYMBOLS_PATTERN.sub('', line)
    return line.strip()


def _is_valid_suggestion(suggestion: str) -> bool:
    if not suggestion or len(suggestion) >= MAX_SUGGESTION_LENGTH:
        return False
    if '<' in suggestion or '>' in suggestion:
        return False
    lowered = suggestion.lower()
    if any(word in lowered for word in SUGGESTION_DENYLIST):
        return False
    return not DIGITS_ONLY_PATTERN.match(suggestion)


def extract_suggestions(raw_list: str) -> List[str]:
    """
    Parse a one-topic-per-line reply into at most six short suggestions.

    Enumerators, bullets and stray leading symbols are removed; lines that are
    too long, look like markup, talk about the model's own reasoning, or are
    bare numbers are dropped. Source order is kept.
    """
    suggestions = []
    for line in (raw_list or '').splitlines():
        suggestion = _normalize_suggestion(line)
        if _is_valid_suggestion(suggestion):
            suggestions.append(suggestion)
            if len(suggestions) == MAX_SUGGESTIONS:
                break
    return suggestions
