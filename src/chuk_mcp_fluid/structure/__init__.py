"""
Score structure - layout resolution and per-section transforms.

This module provides:
- resolve_structure: Order sections by structure labels
- transform_section: Apply per-section modifiers to a score tree
- apply_structure: Both, over a whole score
- StructureLibrary: Discover and load structure definitions
"""

from chuk_mcp_fluid.structure.loader import StructureLibrary, StructureMetadata
from chuk_mcp_fluid.structure.pipeline import StructuredScore, apply_structure
from chuk_mcp_fluid.structure.resolver import (
    describe_resolution,
    parse_label,
    resolve_structure,
    section_names,
)
from chuk_mcp_fluid.structure.transformer import (
    KeyedSequence,
    NodeKind,
    TransformContext,
    TransformResult,
    node_kind,
    transform_section,
)

__all__ = [
    "KeyedSequence",
    "NodeKind",
    "StructureLibrary",
    "StructureMetadata",
    "StructuredScore",
    "TransformContext",
    "TransformResult",
    "apply_structure",
    "describe_resolution",
    "node_kind",
    "parse_label",
    "resolve_structure",
    "section_names",
    "transform_section",
]
