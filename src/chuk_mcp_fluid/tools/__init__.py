"""
MCP tool implementations.

Tools are organized by domain:
- structure - Structure discovery and application
- compilation - DAW message batches and value normalization
"""

from chuk_mcp_fluid.tools.compilation import register_compilation_tools
from chuk_mcp_fluid.tools.structure import register_structure_tools

__all__ = [
    "register_compilation_tools",
    "register_structure_tools",
]
