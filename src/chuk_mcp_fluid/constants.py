"""
Constants and enums for the score pipeline.

No magic strings - use enums for constrained values.
"""

from enum import Enum

# Reserved score keys. Wherever these appear in a section tree, the
# enclosing subtree is subject to the per-section modifier.
PITCH_LIBRARY_KEY = "nLibrary"
DRUMS_KEY = "drums"


class ReservedLabel(str, Enum):
    """Structure labels that do not refer to a section by index."""

    UNIQUE_INTRO = "unique_intro"  # Consumes the first section
    UNIQUE_OUTRO = "unique_outro"  # Takes the last section


# Display names for resolved sections
INTRO_SECTION_NAME = "Intro"
OUTRO_SECTION_NAME = "Outro"
SECTION_PREFIXES = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Address(str, Enum):
    """OSC addresses understood by the DAW server."""

    AUDIOTRACK_SELECT = "/audiotrack/select"
    MIDICLIP_SELECT = "/midiclip/select"
    MIDICLIP_CLEAR = "/midiclip/clear"
    MIDICLIP_NOTE = "/midiclip/n"
    PLUGIN_SELECT = "/plugin/select"
    PLUGIN_SET_PARAM = "/plugin/param/set"
    SAVE = "/save"


# Whole notes -> quarter notes (protocol timebase)
QUARTER_NOTES_PER_WHOLE_NOTE = 4

# MIDI note number range for parsed note names
MIDI_NOTE_MIN = 0
MIDI_NOTE_MAX = 127

# Structure file extensions, in lookup priority order
STRUCTURE_EXTENSIONS: tuple[str, ...] = (".yaml", ".yml", ".json")


class ErrorMessages:
    """Standardized error messages."""

    INVALID_DURATION = "Invalid duration value: {value!r}"
    INVALID_NOTE_NAME = "Invalid note name: {value!r}"
    STRUCTURE_INDEX = "Structure references section {index}, but only {length} sections exist."
    STRUCTURE_NOT_FOUND = "structureId: {structure_id} could not be found."
    MALFORMED_STRUCTURE = "Malformed structure definition: {reason}"
    INVALID_LABEL = "Invalid structure label: {label!r}"
    MALFORMED_NOTE = "Malformed note at position {index}: {reason}"


class SuccessMessages:
    """Standardized success messages."""

    STRUCTURE_APPLIED = "Applied structure '{name}' to {count} sections."
    CLIP_COMPILED = "Compiled clip '{clip}' on track '{track}' ({count} messages)."
