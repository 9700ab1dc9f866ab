"""
Message compiler - builds DAW control messages.

Each builder returns one Message, or an ordered batch of them. All
builders are pure: same input → same messages, in authoring order.

Times are given in whole notes and sent in the protocol's quarter-note
timebase (× 4). Clip boundaries are already in beats and pass through.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from chuk_mcp_fluid.constants import Address
from chuk_mcp_fluid.core.values import (
    value_to_midi_note_number,
    whole_notes_to_quarter_notes,
)
from chuk_mcp_fluid.models.message import ArgType, Message, MessageBatch, Note, OscArg


def _string(value: str) -> OscArg:
    return OscArg(ArgType.STRING, str(value))


def _integer(value: int | float) -> OscArg:
    return OscArg(ArgType.INTEGER, int(value))


def _float(value: int | float) -> OscArg:
    return OscArg(ArgType.FLOAT, float(value))


def select_track(name: str) -> Message:
    """Select (or create) the audio track with this name."""
    return Message(Address.AUDIOTRACK_SELECT.value, (_string(name),))


def select_clip(name: str, start_beats: float, end_beats: float) -> Message:
    """Select (or create) a MIDI clip on the selected track, spanning start to end beats."""
    return Message(
        Address.MIDICLIP_SELECT.value,
        (_string(name), _float(start_beats), _float(end_beats)),
    )


def clear_clip() -> Message:
    """Remove every note from the selected clip."""
    return Message(Address.MIDICLIP_CLEAR.value)


def add_note(
    pitch: int | float | str,
    start: int | float | str,
    length: int | float | str,
    velocity: int | None = None,
) -> Message:
    """
    Add a note to the selected clip.

    Args:
        pitch: MIDI note number or note name ('c4')
        start: Start in whole notes (any duration notation)
        length: Length in whole notes (any duration notation)
        velocity: Optional velocity. When omitted, no velocity argument
            is sent and the DAW uses its default.

    Returns:
        Message with args [pitch, start × 4, length × 4 (, velocity)]

    Raises:
        MalformedNoteError: If pitch or velocity is not a whole number,
            start is negative or length is not positive
        InvalidNoteNameError: If pitch is an unparseable name
        InvalidDurationError: If start or length is an unparseable duration
    """
    note = Note(pitch, start, length, velocity)
    note.check(0)
    return _note_message(note)


def select_plugin(name: str) -> Message:
    """Select a plugin on the selected track by name."""
    return Message(Address.PLUGIN_SELECT.value, (_string(name),))


def set_param(name: str, value: float, ramp_seconds: float = 0) -> Message:
    """Set a parameter on the selected plugin, ramping over ramp_seconds."""
    return Message(
        Address.PLUGIN_SET_PARAM.value,
        (_string(name), _float(value), _float(ramp_seconds)),
    )


def save_session(path: str) -> Message:
    """Save the active session to path."""
    return Message(Address.SAVE.value, (_string(path),))


def create_clip(
    track_name: str,
    clip_name: str,
    start_beats: float,
    end_beats: float,
    notes: Iterable[Note | Mapping[str, Any]],
) -> MessageBatch:
    """
    Build the batch that fills a clip with notes.

    The batch is: select track, select clip, clear clip, then one note
    message per note in the order given. Notes are not sorted; callers
    wanting temporal order must sort first.

    Every note is compiled before anything is returned, so a bad note
    fails the whole batch.

    Raises:
        MalformedNoteError: If a note lacks pitch, start or length, or
            holds an out-of-range value
        InvalidNoteNameError / InvalidDurationError: For bad notations
    """
    note_messages = [
        _note_message(Note.from_value(note, index)) for index, note in enumerate(notes)
    ]
    return [
        select_track(track_name),
        select_clip(clip_name, start_beats, end_beats),
        clear_clip(),
        *note_messages,
    ]


def _note_message(note: Note) -> Message:
    """Build the note message for an already checked note."""
    args = [
        _integer(value_to_midi_note_number(note.pitch)),
        _float(whole_notes_to_quarter_notes(note.start)),
        _float(whole_notes_to_quarter_notes(note.length)),
    ]
    if note.velocity is not None:
        args.append(_integer(note.velocity))
    return Message(Address.MIDICLIP_NOTE.value, tuple(args))


def batch_to_dicts(batch: Iterable[Message]) -> list[dict[str, Any]]:
    """Convert a batch to plain dictionaries for a transport."""
    return [message.to_dict() for message in batch]
