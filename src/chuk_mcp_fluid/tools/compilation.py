"""
Compilation tools - MCP tools for building DAW message batches.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fluid.compiler import batch_to_dicts, create_clip
from chuk_mcp_fluid.constants import SuccessMessages
from chuk_mcp_fluid.core import value_to_midi_note_number, value_to_whole_notes

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_compilation_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register compilation tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fluid_compile_clip(
        track: str,
        clip: str,
        start_beats: float,
        end_beats: float,
        notes: list[dict[str, Any]],
    ) -> str:
        """
        Compile notes into the message batch that fills one clip.

        Notes use n/s/l/v (or pitch/start/length/velocity). Times are in
        whole notes; pitches may be numbers or names like 'c4'.

        Args:
            track: Track name
            clip: Clip name
            start_beats: Clip start in beats
            end_beats: Clip end in beats
            notes: Notes in the order they should be sent

        Returns:
            JSON string with the ordered messages

        Example:
            fluid_compile_clip(track="bass", clip="v1", start_beats=0, end_beats=8,
                               notes=[{"n": "e2", "s": 0, "l": "quarter"}])
        """
        try:
            batch = create_clip(track, clip, start_beats, end_beats, notes)
            return json.dumps(
                {
                    "status": "success",
                    "messages": batch_to_dicts(batch),
                    "message": SuccessMessages.CLIP_COMPILED.format(
                        clip=clip, track=track, count=len(batch)
                    ),
                }
            )
        except Exception as e:
            logger.exception("Failed to compile clip")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fluid_compile_clip"] = fluid_compile_clip

    @mcp.tool  # type: ignore[arg-type]
    async def fluid_normalize_values(
        durations: list[Any] | None = None,
        pitches: list[Any] | None = None,
    ) -> str:
        """
        Convert duration and pitch notations to canonical numbers.

        Args:
            durations: Durations ('1/4', 'sixteenth', 0.5) → whole notes
            pitches: Pitches ('c4', 'Eb3', 58) → MIDI note numbers

        Returns:
            JSON string with the converted values, in input order

        Example:
            fluid_normalize_values(durations=["1/4"], pitches=["c#4"])
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "durations": [float(value_to_whole_notes(d)) for d in durations or []],
                    "pitches": [value_to_midi_note_number(p) for p in pitches or []],
                }
            )
        except Exception as e:
            logger.exception("Failed to normalize values")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fluid_normalize_values"] = fluid_normalize_values

    return tools
