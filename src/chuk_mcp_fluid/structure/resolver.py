"""
Structure resolver - orders sections according to a structure's labels.

Labels are either section indices or the reserved tokens:
- 'unique_intro': the first section, played once. Consuming it shifts
  every following numeric label up by one.
- 'unique_outro': the last section. It is drawn from the tail, so no
  shift is applied.

Example (4 sections):
    ["unique_intro", "0", "1", "unique_outro"]
    → [sections[0], sections[1], sections[2], sections[3]]
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from chuk_mcp_fluid.constants import (
    INTRO_SECTION_NAME,
    OUTRO_SECTION_NAME,
    SECTION_PREFIXES,
    ErrorMessages,
    ReservedLabel,
)
from chuk_mcp_fluid.errors import MalformedStructureError, StructureIndexError

T = TypeVar("T")


def parse_label(label: str | int) -> ReservedLabel | int:
    """
    Parse a structure label.

    Returns:
        A ReservedLabel, or the non-negative section index

    Raises:
        MalformedStructureError: If the label is neither
    """
    if isinstance(label, bool):
        raise MalformedStructureError(ErrorMessages.INVALID_LABEL.format(label=label))

    if isinstance(label, int):
        index = label
    elif isinstance(label, str):
        try:
            return ReservedLabel(label)
        except ValueError:
            pass
        if not label.strip().isdecimal():
            raise MalformedStructureError(ErrorMessages.INVALID_LABEL.format(label=label))
        index = int(label)
    else:
        raise MalformedStructureError(ErrorMessages.INVALID_LABEL.format(label=label))

    if index < 0:
        raise MalformedStructureError(ErrorMessages.INVALID_LABEL.format(label=label))
    return index


def _select(sections: Sequence[T], index: int) -> T:
    """Index into sections without Python's negative wrap-around."""
    if not 0 <= index < len(sections):
        raise StructureIndexError(index, len(sections))
    return sections[index]


def resolve_structure(sections: Sequence[T], labels: Sequence[str | int]) -> list[T]:
    """
    Select and order sections according to labels.

    The result always has one entry per label. The same section may be
    selected more than once; entries are the input objects, not copies.

    Args:
        sections: Unique sections of the score
        labels: Structure labels in playback order

    Returns:
        Sections in playback order

    Raises:
        StructureIndexError: If a label selects a section that does not exist
        MalformedStructureError: If a label cannot be parsed
    """
    resolved: list[T] = []
    offset = 0

    for label in labels:
        parsed = parse_label(label)
        if parsed == ReservedLabel.UNIQUE_INTRO:
            resolved.append(_select(sections, 0))
            offset += 1
        elif parsed == ReservedLabel.UNIQUE_OUTRO:
            resolved.append(_select(sections, len(sections) - 1))
        else:
            resolved.append(_select(sections, parsed + offset))

    return resolved


def section_names(labels: Sequence[str | int]) -> list[str]:
    """
    Display names for resolved sections.

    Reserved labels become 'Intro' / 'Outro'. Numeric labels map to a
    letter (0 → A, 1 → B, ...) followed by how many times that letter
    has already been used: A0, B0, A1, ... Past Z the letters continue
    as AA, AB, ... so every valid label has a name.
    """
    counters: dict[int, int] = {}
    names: list[str] = []

    for label in labels:
        parsed = parse_label(label)
        if parsed == ReservedLabel.UNIQUE_INTRO:
            names.append(INTRO_SECTION_NAME)
        elif parsed == ReservedLabel.UNIQUE_OUTRO:
            names.append(OUTRO_SECTION_NAME)
        else:
            count = counters.get(parsed, 0)
            names.append(f"{_section_prefix(parsed)}{count}")
            counters[parsed] = count + 1

    return names


def _section_prefix(index: int) -> str:
    """Spreadsheet-style letters: 0 → A, 25 → Z, 26 → AA, 27 → AB."""
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, len(SECTION_PREFIXES))
        letters = SECTION_PREFIXES[remainder] + letters
    return letters


def describe_resolution(labels: Sequence[str | int], section_count: int) -> list[dict[str, Any]]:
    """
    Describe which source section each label selects, without a score.

    Useful for previewing a structure against a score of known length.
    """
    placeholders = list(range(section_count))
    indices = resolve_structure(placeholders, labels)
    names = section_names(labels)
    return [
        {"position": position, "label": label, "name": name, "source_section": index}
        for position, (label, name, index) in enumerate(zip(labels, names, indices, strict=True))
    ]
