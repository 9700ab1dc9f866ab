"""
Data models for the score pipeline.

This module provides:
- StructureDefinition: Layout labels and per-section templates
- SectionTemplate: Per-section modifiers (key_diff, drums-delta)
- Note: Compiler input
- Message: Compiler output
"""

from chuk_mcp_fluid.models.message import ArgType, Message, MessageBatch, Note, OscArg
from chuk_mcp_fluid.models.structure import (
    SectionTemplate,
    StructureDefinition,
    StructureLayout,
)

__all__ = [
    "ArgType",
    "Message",
    "MessageBatch",
    "Note",
    "OscArg",
    "SectionTemplate",
    "StructureDefinition",
    "StructureLayout",
]
