"""
Core value primitives.

Canonical units everything else builds on:
- Whole-note fractions for durations
- MIDI note numbers for pitches
"""

from chuk_mcp_fluid.core.values import (
    Accidental,
    DurationName,
    NoteLetter,
    value_to_midi_note_number,
    value_to_whole_notes,
    whole_notes_to_quarter_notes,
)

__all__ = [
    "Accidental",
    "DurationName",
    "NoteLetter",
    "value_to_midi_note_number",
    "value_to_whole_notes",
    "whole_notes_to_quarter_notes",
]
