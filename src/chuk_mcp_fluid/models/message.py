"""
Message model - the output of the compiler.

A Message is one OSC-style control message: an address plus typed
arguments. A batch is an ordered list of messages that together make
one DAW edit (for example, one populated clip).

Notes are the compiler's input: pitch, start and length in any notation
the value normalizer accepts, plus an optional velocity.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from numbers import Rational
from typing import Any

from chuk_mcp_fluid.core.values import value_to_midi_note_number, value_to_whole_notes
from chuk_mcp_fluid.errors import MalformedNoteError

# Accepted spellings for each note field: (short, long)
_NOTE_FIELDS: dict[str, tuple[str, str]] = {
    "pitch": ("n", "pitch"),
    "start": ("s", "start"),
    "length": ("l", "length"),
    "velocity": ("v", "velocity"),
}


class ArgType(str, Enum):
    """OSC argument types."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"


@dataclass(frozen=True)
class OscArg:
    """A single typed message argument."""

    type: ArgType
    value: str | int | float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"type": self.type.value, "value": self.value}


@dataclass(frozen=True)
class Message:
    """
    One control message.

    Immutable; the argument order is the wire order.
    """

    address: str
    args: tuple[OscArg, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary for a transport.

        The 'args' key is omitted for messages without arguments.
        """
        d: dict[str, Any] = {"address": self.address}
        if self.args:
            d["args"] = [arg.to_dict() for arg in self.args]
        return d


# One atomic DAW edit
MessageBatch = list[Message]


@dataclass(frozen=True)
class Note:
    """
    A note to place in a clip.

    Times are in whole notes. Values may still be in any accepted
    notation ('c4', '1/8', 'quarter'); the compiler normalizes them.
    """

    pitch: int | float | str
    start: int | float | str
    length: int | float | str
    velocity: int | None = None

    @classmethod
    def from_value(cls, value: Note | Mapping[str, Any], index: int) -> Note:
        """
        Build a Note from a Note or a mapping.

        Mappings may use short keys (n, s, l, v) or long keys
        (pitch, start, length, velocity).

        Args:
            value: Note data
            index: Position in the input list, for error reporting

        Raises:
            MalformedNoteError: If pitch, start or length is missing, or a
                value is out of range (see check)
        """
        if isinstance(value, cls):
            value.check(index)
            return value
        if not isinstance(value, Mapping):
            raise MalformedNoteError(index, f"expected a mapping, got {type(value).__name__}")

        fields: dict[str, Any] = {}
        for name, keys in _NOTE_FIELDS.items():
            for key in keys:
                if value.get(key) is not None:
                    fields[name] = value[key]
                    break

        missing = [name for name in ("pitch", "start", "length") if name not in fields]
        if missing:
            raise MalformedNoteError(index, f"missing {', '.join(missing)}")

        note = cls(**fields)
        note.check(index)
        return note

    def check(self, index: int) -> None:
        """
        Validate the note after normalizing its notations.

        Pitch and velocity must be whole numbers, start must not be
        negative and length must be positive.

        Raises:
            MalformedNoteError: If a value is out of range
            InvalidNoteNameError / InvalidDurationError: For bad notations
        """
        if not _is_whole_number(value_to_midi_note_number(self.pitch)):
            raise MalformedNoteError(index, f"pitch must be a whole number, got {self.pitch!r}")
        if self.velocity is not None and not _is_whole_number(self.velocity):
            raise MalformedNoteError(
                index, f"velocity must be a whole number, got {self.velocity!r}"
            )
        if value_to_whole_notes(self.start) < 0:
            raise MalformedNoteError(index, f"start must not be negative, got {self.start!r}")
        if value_to_whole_notes(self.length) <= 0:
            raise MalformedNoteError(index, f"length must be positive, got {self.length!r}")


def _is_whole_number(value: Any) -> bool:
    """True for ints, integral floats and whole Fractions (bool excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Rational):
        return value.denominator == 1
    return isinstance(value, float) and value.is_integer()
