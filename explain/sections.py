# SPDX-License-Identifier: AGPL-3.0-only

"""
Section parsing for step-by-step explanations.

Models are asked to wrap their answer in INTRO/STEPn/SUMMARY markers, but they
do not always comply. Four recognizers of decreasing strictness are tried in
order and the first one that finds anything wins:

1. current tags      ``INTRO_START ... INTRO_END``, ``STEP2_START ... STEP2_END``
2. legacy tags       ``[INTRO] ... [/INTRO]``, ``[STEP2] ... [/STEP2]``
3. numbered lines    lines that start with ``Step 2.``, ``2.`` or ``2:``
4. numbered chunks   the text split before every ``2.`` / ``2:`` enumerator

Tag-based recognizers always emit INTRO first and SUMMARY last, with steps in
the order they appear. The positional recognizers keep document order.
"""
import logging
import re
from typing import Callable, List, Optional, Tuple

from common.errors import ParseExhaustionError
from common.models import Section, SectionKind

logger = logging.getLogger(__name__)

FLAGS = re.IGNORECASE | re.DOTALL

CURRENT_INTRO_PATTERN = re.compile(r'INTRO_START(.*?)INTRO_END', FLAGS)
CURRENT_STEP_PATTERN = re.compile(r'STEP(\d+)_START(.*?)STEP\d+_END', FLAGS)
CURRENT_SUMMARY_PATTERN = re.compile(r'SUMMARY_START(.*?)SUMMARY_END', FLAGS)

LEGACY_INTRO_PATTERN = re.compile(r'\[INTRO\](.*?)\[/INTRO\]', FLAGS)
LEGACY_STEP_PATTERN = re.compile(r'\[STEP(\d+)\](.*?)\[/STEP\d+\]', FLAGS)
LEGACY_SUMMARY_PATTERN = re.compile(r'\[SUMMARY\](.*?)\[/SUMMARY\]', FLAGS)

MARKER_PATTERN = re.compile(
    r'INTRO_START|INTRO_END|SUMMARY_START|SUMMARY_END|STEP\d+_START|STEP\d+_END'
    r'|\[/?INTRO\]|\[/?SUMMARY\]|\[/?STEP\d+\]',
    re.IGNORECASE
)

STEP_LINE_PATTERN = re.compile(r'^(?:Step\s*)?(\d+)[.:]\s*(.*)', re.IGNORECASE)
# (?<!\d) keeps "12. " in one piece instead of splitting before the "2"
ENUMERATOR_SPLIT_PATTERN = re.compile(r'(?=(?<!\d)\d+[.:]\s)')
NUMBERED_CHUNK_PATTERN = re.compile(r'^(\d+)[.:]\s*(.*)', re.DOTALL)

BLANK_LINES_PATTERN = re.compile(r'\n\s*\n\s*\n')


def strip_markers(text: str) -> str:
    """Remove every section marker token (both tag families) and trim."""
    return MARKER_PATTERN.sub('', text).strip()


def _make_section(kind: SectionKind, body: str, number: Optional[int] = None,
                  title: Optional[str] = None) -> Section:
    return Section(kind=kind, number=number, body=body, title=title, content=strip_markers(body))


def _parse_tagged(text: str, intro_pattern, step_pattern, summary_pattern) -> List[Section]:
    sections = []

    intro = intro_pattern.search(text)
    if intro:
        sections.append(_make_section(SectionKind.INTRO, intro.group(1)))

    for match in step_pattern.finditer(text):
        sections.append(_make_section(SectionKind.STEP, match.group(2), number=int(match.group(1))))

    summary = summary_pattern.search(text)
    if summary:
        sections.append(_make_section(SectionKind.SUMMARY, summary.group(1)))

    return sections


def parse_current_tags(text: str) -> List[Section]:
    """INTRO_START/STEPn_START/SUMMARY_START markers."""
    return _parse_tagged(text, CURRENT_INTRO_PATTERN, CURRENT_STEP_PATTERN, CURRENT_SUMMARY_PATTERN)


def parse_legacy_tags(text: str) -> List[Section]:
    """[INTRO]/[STEPn]/[SUMMARY] bracket markers."""
    return _parse_tagged(text, LEGACY_INTRO_PATTERN, LEGACY_STEP_PATTERN, LEGACY_SUMMARY_PATTERN)


def parse_numbered_lines(text: str) -> List[Section]:
    """
    Scan lines for ``Step N.`` / ``N.`` / ``N:`` openers.

    Lines before the first opener become the INTRO, which is only emitted once
    an opener has been seen. Everything after an opener belongs to that step
    until the next one; there is no SUMMARY here.
    """
    lines = [line.strip() for line in text.split('\n') if line.strip()]

    sections: List[Section] = []
    intro_lines: List[str] = []
    current: Optional[Tuple[int, str, List[str]]] = None

    for line in lines:
        match = STEP_LINE_PATTERN.match(line)
        if match:
            if current is None:
                if intro_lines:
                    sections.append(_make_section(SectionKind.INTRO, '\n'.join(intro_lines)))
            else:
                sections.append(_finish_step(current))
            title = match.group(2)
            current = (int(match.group(1)), title, [title] if title else [])
        elif current is not None:
            current[2].append(line)
        else:
            intro_lines.append(line)

    if current is not None:
        sections.append(_finish_step(current))

    return sections


def _finish_step(step: Tuple[int, str, List[str]]) -> Section:
    number, title, body_lines = step
    return _make_section(SectionKind.STEP, '\n'.join(body_lines), number=number, title=title)


def parse_numbered_chunks(text: str) -> List[Section]:
    """
    Split the text before every ``N.`` / ``N:`` enumerator.

    A leading chunk without a numeral becomes the INTRO; every numbered chunk
    becomes a step titled by its first line.
    """
    chunks = ENUMERATOR_SPLIT_PATTERN.split(text)
    if len(chunks) <= 1:
        return []

    sections = []
    for index, chunk in enumerate(chunks):
        trimmed = chunk.strip()
        if not trimmed:
            continue
        match = NUMBERED_CHUNK_PATTERN.match(trimmed)
        if match:
            number = int(match.group(1))
            body = match.group(2).strip()
            title = body.split('\n')[0] or f"Step {number}"
            sections.append(_make_section(SectionKind.STEP, body, number=number, title=title))
        elif index == 0:
            sections.append(_make_section(SectionKind.INTRO, trimmed))

    return sections


STRATEGIES: Tuple[Tuple[str, Callable[[str], List[Section]]], ...] = (
    ("current_tags", parse_current_tags),
    ("legacy_tags", parse_legacy_tags),
    ("numbered_lines", parse_numbered_lines),
    ("numbered_chunks", parse_numbered_chunks),
)


def parse_sections(explanation: str) -> List[Section]:
    """
    Recover INTRO/STEP/SUMMARY sections from an explanation.

    Returns an empty list when no strategy recognises anything; the caller is
    expected to fall back to showing the whole text.
    """
    text = explanation or ''
    for name, strategy in STRATEGIES:
        sections = strategy(text)
        if sections:
            logger.debug("Parsed %d sections with %s", len(sections), name)
            return sections
        logger.debug("Section strategy %s found nothing", name)
    return []


def require_sections(explanation: str) -> List[Section]:
    """Like parse_sections, but raise ParseExhaustionError when nothing is found."""
    sections = parse_sections(explanation)
    if not sections:
        raise ParseExhaustionError("No section strategy matched the explanation")
    return sections


def fallback_text(explanation: str) -> str:
    """Whole explanation with marker tokens removed, for single-heading display."""
    text = strip_markers(explanation or '')
    return BLANK_LINES_PATTERN.sub('\n\n', text).strip()
