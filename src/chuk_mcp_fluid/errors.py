"""
Error taxonomy for the score pipeline.

Every error is raised where it is detected and aborts the current
invocation. There is no partial-result recovery in the core; only the
MCP tool layer catches these and reports them.
"""

from __future__ import annotations

from typing import Any

from chuk_mcp_fluid.constants import ErrorMessages


class FluidError(ValueError):
    """Base class for all score pipeline errors."""


class InvalidDurationError(FluidError):
    """A duration notation could not be parsed."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(ErrorMessages.INVALID_DURATION.format(value=value))


class InvalidNoteNameError(FluidError):
    """A pitch notation could not be parsed."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(ErrorMessages.INVALID_NOTE_NAME.format(value=value))


class StructureIndexError(FluidError, IndexError):
    """A structure label or section index points outside the available sections."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(ErrorMessages.STRUCTURE_INDEX.format(index=index, length=length))


class StructureNotFoundError(FluidError, LookupError):
    """No structure definition exists with the requested id."""

    def __init__(self, structure_id: str) -> None:
        self.structure_id = structure_id
        super().__init__(ErrorMessages.STRUCTURE_NOT_FOUND.format(structure_id=structure_id))


class MalformedStructureError(FluidError):
    """A structure definition is missing required fields or has invalid values."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(ErrorMessages.MALFORMED_STRUCTURE.format(reason=reason))


class MalformedNoteError(FluidError):
    """A note passed to the message compiler is missing pitch, start or length."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(ErrorMessages.MALFORMED_NOTE.format(index=index, reason=reason))
