"""
Structure tools - MCP tools for laying out scores.

Tools for discovering structure definitions and applying them to scores.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_fluid.constants import SuccessMessages
from chuk_mcp_fluid.models.structure import StructureDefinition
from chuk_mcp_fluid.structure import StructureLibrary, apply_structure, describe_resolution

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_structure_tools(mcp: ChukMCPServer, library: StructureLibrary) -> dict[str, Any]:
    """
    Register structure tools with the MCP server.

    Args:
        mcp: The MCP server instance
        library: The structure library

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fluid_list_structures() -> str:
        """
        List available structure definitions.

        Returns:
            JSON string with structure ids, labels and descriptions

        Example:
            fluid_list_structures()
        """
        try:
            structures = library.list_structures()
            return json.dumps(
                {
                    "status": "success",
                    "structures": [
                        {
                            "name": s.name,
                            "description": s.description,
                            "labels": s.labels,
                            "sections": s.section_count,
                            "source": s.source,
                        }
                        for s in structures
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to list structures")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fluid_list_structures"] = fluid_list_structures

    @mcp.tool  # type: ignore[arg-type]
    async def fluid_describe_structure(structure: str, section_count: int | None = None) -> str:
        """
        Show a structure definition and, optionally, which source section
        each label selects.

        Args:
            structure: Structure id (e.g., 'verse-chorus')
            section_count: Number of unique sections in the score to preview against

        Returns:
            JSON string with the definition and resolution preview

        Example:
            fluid_describe_structure(structure="verse-chorus", section_count=4)
        """
        try:
            definition = library.get_structure(structure)
            result: dict[str, Any] = {
                "status": "success",
                "structure": definition.to_dict(),
            }
            if section_count is not None:
                result["resolution"] = describe_resolution(definition.labels, section_count)
            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to describe structure")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fluid_describe_structure"] = fluid_describe_structure

    @mcp.tool  # type: ignore[arg-type]
    async def fluid_apply_structure(
        score: list[Any],
        structure: str | None = None,
        definition: dict[str, Any] | None = None,
    ) -> str:
        """
        Apply a structure to a score.

        Sections are ordered by the structure's labels, then each one is
        transposed (nLibrary) and has its drums removed or kept according
        to its template entry.

        Args:
            score: List of unique score sections
            structure: Structure id from the library
            definition: Inline structure definition (used if no id is given)

        Returns:
            JSON string with the structured sections

        Example:
            fluid_apply_structure(score=[intro, verse, chorus, outro], structure="verse-chorus")
        """
        try:
            if structure is not None:
                resolved = library.get_structure(structure)
            elif definition is not None:
                resolved = StructureDefinition.from_dict(definition)
            else:
                return json.dumps(
                    {"status": "error", "message": "Provide a structure id or a definition"}
                )

            structured = apply_structure(score, resolved)
            return json.dumps(
                {
                    "status": "success",
                    "score": structured.to_dict(),
                    "message": SuccessMessages.STRUCTURE_APPLIED.format(
                        name=resolved.name or "inline", count=len(structured)
                    ),
                },
                default=str,
            )
        except Exception as e:
            logger.exception("Failed to apply structure")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fluid_apply_structure"] = fluid_apply_structure

    return tools
