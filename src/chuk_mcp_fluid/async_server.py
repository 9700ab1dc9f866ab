#!/usr/bin/env python3
"""
Async Fluid MCP Server using chuk-mcp-server

This server exposes the score pipeline as MCP tools:
- Listing and describing structure definitions
- Applying a structure to a score (ordering, transposition, drum removal)
- Compiling notes into DAW message batches
- Normalizing duration and pitch notations

Delivering batches to a running DAW is left to the client.
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_fluid.structure import StructureLibrary
from chuk_mcp_fluid.tools import register_compilation_tools, register_structure_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-fluid")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
STRUCTURES_DIR = BASE_PATH / "structures"
LIBRARY_PATH = Path(__file__).parent / "structure" / "library"

structure_library = StructureLibrary(
    library_path=LIBRARY_PATH,
    project_path=STRUCTURES_DIR,
)

# Register all tools
structure_tools = register_structure_tools(mcp, structure_library)
compilation_tools = register_compilation_tools(mcp)

# Export tool functions for direct access
fluid_list_structures = structure_tools["fluid_list_structures"]
fluid_describe_structure = structure_tools["fluid_describe_structure"]
fluid_apply_structure = structure_tools["fluid_apply_structure"]

fluid_compile_clip = compilation_tools["fluid_compile_clip"]
fluid_normalize_values = compilation_tools["fluid_normalize_values"]

logger.info("CHUK Fluid MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Structures dir: {STRUCTURES_DIR}")


def set_structures_dir(path: Path) -> None:
    """Point the structure library at a different project directory."""
    structure_library.project_path = path
    structure_library.clear_cache()
    logger.info(f"  Structures dir: {path}")
