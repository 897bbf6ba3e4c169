"""Splitting completion texts into text and blank segments.

Two template styles are supported:
- Underscore templates: each run of underscores ("_____") is a blank slot,
  filled left to right by the blanks in position order.
- Positional templates: the text contains the answers inline, and each
  blank is cut out at `position`, spanning len(answer) characters.
"""

from typing import Literal

from pydantic import BaseModel

from models import Blank


class TemplateSegment(BaseModel):
    kind: Literal["text", "blank"]
    text: str = ""
    blank_id: str | None = None
    index: int | None = None  # Blank order within the template


def _text(text: str) -> TemplateSegment:
    return TemplateSegment(kind="text", text=text)


def _blank(blank: Blank, index: int) -> TemplateSegment:
    return TemplateSegment(kind="blank", blank_id=blank.id, index=index)


def segment_template(text: str, blanks: list[Blank]) -> list[TemplateSegment]:
    """Split a completion text into segments.

    Args:
        text: The completion text.
        blanks: The blanks of the exercise (any order).

    Returns:
        Segments in reading order. Empty text segments are omitted.
    """
    sorted_blanks = sorted(blanks, key=lambda blank: blank.position)
    if not sorted_blanks or "_" not in text:
        return _segment_positional(text, sorted_blanks)
    return _segment_underscores(text, sorted_blanks)


def _segment_positional(text: str, sorted_blanks: list[Blank]) -> list[TemplateSegment]:
    segments: list[TemplateSegment] = []
    last_position = 0

    for index, blank in enumerate(sorted_blanks):
        before = text[last_position : blank.position]
        if before:
            segments.append(_text(before))
        segments.append(_blank(blank, index))
        last_position = blank.position + len(blank.answer)

    if last_position < len(text):
        segments.append(_text(text[last_position:]))
    return segments


def _segment_underscores(text: str, sorted_blanks: list[Blank]) -> list[TemplateSegment]:
    segments: list[TemplateSegment] = []
    remaining = text

    for index, blank in enumerate(sorted_blanks):
        start = remaining.find("_")
        if start == -1:
            # More blanks than slots; extra blanks have nowhere to go
            break
        end = start
        while end < len(remaining) and remaining[end] == "_":
            end += 1

        if start > 0:
            segments.append(_text(remaining[:start]))
        segments.append(_blank(blank, index))
        remaining = remaining[end:]

    if remaining:
        segments.append(_text(remaining))
    return segments
