"""
Value notations - durations and pitches.

Scores may write durations as numbers, "a/b" fractions or named tokens,
and pitches as numbers or note names like 'c4', 'Eb3', 'f##-1'.
These helpers turn every accepted notation into canonical numbers:

- Durations become whole-note fractions (0.25 = quarter note)
- Pitches become MIDI note numbers (C4 = 60)

Numbers are assumed to be canonical already and pass through unchanged.
"""

from __future__ import annotations

import re
from enum import Enum, IntEnum
from fractions import Fraction
from numbers import Number

from chuk_mcp_fluid.constants import MIDI_NOTE_MAX, MIDI_NOTE_MIN, QUARTER_NOTES_PER_WHOLE_NOTE
from chuk_mcp_fluid.errors import InvalidDurationError, InvalidNoteNameError

_FRACTION_PATTERN = re.compile(r"([0-9]+)/([0-9]+)")
_OCTAVE_PATTERN = re.compile(r"[+-]?[0-9]+")


class DurationName(str, Enum):
    """
    Named durations accepted in place of a number.

    Matching is case-sensitive: 'quarter' is valid, 'Quarter' is not.
    """

    WHOLE = "whole"
    HALF = "half"
    QUARTER = "quarter"
    EIGHTH = "eighth"
    SIXTEENTH = "sixteenth"
    THIRTY_SECOND = "thirtysecond"
    SIXTY_FOURTH = "sixty-fourth"

    @property
    def whole_notes(self) -> Fraction:
        """Length of this duration as a fraction of a whole note."""
        return _DURATION_WHOLE_NOTES[self]


# Each step halves the previous one (1/2^n)
_DURATION_WHOLE_NOTES: dict[DurationName, Fraction] = {
    name: Fraction(1, 2**n) for n, name in enumerate(DurationName)
}


class NoteLetter(IntEnum):
    """Natural note letters and their semitone offset above C."""

    C = 0
    D = 2
    E = 4
    F = 5
    G = 7
    A = 9
    B = 11


class Accidental(IntEnum):
    """Accidental symbols and the semitone shift each one applies."""

    SHARP = 1
    FLAT = -1

    @classmethod
    def from_symbol(cls, symbol: str) -> Accidental | None:
        """Map '#' or 'b' to an accidental, anything else to None."""
        return _ACCIDENTAL_SYMBOLS.get(symbol)


_ACCIDENTAL_SYMBOLS: dict[str, Accidental] = {
    "#": Accidental.SHARP,
    "b": Accidental.FLAT,
}


def _is_number(value: object) -> bool:
    """True for int/float/Fraction values (bool is excluded)."""
    return isinstance(value, Number) and not isinstance(value, bool)


def value_to_whole_notes(value: int | float | Fraction | str) -> int | float | Fraction:
    """
    Convert a duration notation to a whole-note fraction.

    Args:
        value: A number (returned unchanged), a string like '1/4',
            or a DurationName value like 'sixteenth'

    Returns:
        The duration in whole notes. Parsed strings return a Fraction.

    Raises:
        InvalidDurationError: If the value is not a recognised notation

    Examples:
        value_to_whole_notes("1/4") == Fraction(1, 4)
        value_to_whole_notes("sixteenth") == Fraction(1, 16)
        value_to_whole_notes(0.125) == 0.125
    """
    if _is_number(value):
        return value

    if not isinstance(value, str):
        raise InvalidDurationError(value)

    match = _FRACTION_PATTERN.fullmatch(value)
    if match:
        numerator, denominator = int(match.group(1)), int(match.group(2))
        if numerator == 0 or denominator == 0:
            raise InvalidDurationError(value)
        return Fraction(numerator, denominator)

    try:
        return DurationName(value).whole_notes
    except ValueError:
        raise InvalidDurationError(value) from None


def value_to_midi_note_number(value: int | float | str) -> int | float:
    """
    Convert a pitch notation to a MIDI note number.

    Note names are <letter><accidentals><octave>: the letter is
    case-insensitive, accidentals are any run of '#' and 'b', and the
    octave is a signed integer. C4 = 60. Names must land in 0-127.

    Numbers pass through unchanged. They are not range checked, so values
    outside 0-127 are allowed for callers that offset pitches later.

    Raises:
        InvalidNoteNameError: If the string cannot be parsed or names a
            note outside the MIDI range
    """
    if _is_number(value):
        return value

    if not isinstance(value, str) or not value:
        raise InvalidNoteNameError(value)

    try:
        letter = NoteLetter[value[0].upper()]
    except KeyError:
        raise InvalidNoteNameError(value) from None

    semitones = int(letter)
    index = 1
    while index < len(value):
        accidental = Accidental.from_symbol(value[index])
        if accidental is None:
            break
        semitones += accidental
        index += 1

    octave = value[index:]
    if not _OCTAVE_PATTERN.fullmatch(octave):
        raise InvalidNoteNameError(value)

    note_number = semitones + (int(octave) + 1) * 12
    if not MIDI_NOTE_MIN <= note_number <= MIDI_NOTE_MAX:
        raise InvalidNoteNameError(value)
    return note_number


def whole_notes_to_quarter_notes(value: int | float | Fraction | str) -> float:
    """Convert a duration notation to the protocol's quarter-note timebase."""
    return float(value_to_whole_notes(value) * QUARTER_NOTES_PER_WHOLE_NOTE)
