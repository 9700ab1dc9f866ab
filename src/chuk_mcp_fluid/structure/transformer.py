"""
Tree transformer - applies per-section edits to an arbitrary score tree.

Sections are free-form trees of mappings, sequences and scalars. The
transformer knows only two reserved keys:

- 'nLibrary' (pitch library): every numeric leaf below it is transposed
  by the section's key_diff. Non-numeric leaves are left alone.
- 'drums': replaced by an empty mapping when the section's drums-delta
  is 0, otherwise kept and walked like any other subtree.

Every other key is passed through untouched, so new score fields need no
changes here.

The walk is pure: it builds a new tree and never mutates its input.
Named entries found on keyed sequences are reported back as paths
alongside the new tree, since a plain list cannot carry them.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Number
from typing import Any

from chuk_mcp_fluid.constants import DRUMS_KEY, PITCH_LIBRARY_KEY
from chuk_mcp_fluid.models.structure import SectionTemplate, StructureDefinition

PathSegment = str | int
Path = tuple[PathSegment, ...]


class KeyedSequence(list):
    """
    A sequence that also carries named, non-positional entries.

    Scores sometimes attach properties to a list of events (for example a
    rhythm string next to the note entries). Positional items live in the
    list itself, named ones in `extras`.
    """

    def __init__(self, items: Any = (), extras: Mapping[str, Any] | None = None):
        super().__init__(items)
        self.extras: dict[str, Any] = dict(extras or {})

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeyedSequence):
            return list.__eq__(self, other) and self.extras == other.extras
        return list.__eq__(self, other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"KeyedSequence({list.__repr__(self)}, extras={self.extras!r})"


class NodeKind(str, Enum):
    """Shape of a score tree node."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    KEYED_SEQUENCE = "keyed_sequence"
    SCALAR = "scalar"


def node_kind(node: Any) -> NodeKind:
    """Classify a node. Strings and bytes are scalars, not sequences."""
    if isinstance(node, Mapping):
        return NodeKind.MAPPING
    if isinstance(node, KeyedSequence):
        return NodeKind.KEYED_SEQUENCE
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


@dataclass(frozen=True)
class TransformContext:
    """
    State inherited from ancestors during the walk.

    in_pitch_library is set once the pitch library key is entered and
    stays set for every descendant.
    """

    section_index: int
    template: SectionTemplate
    in_pitch_library: bool = False

    def enter(self, key: PathSegment) -> TransformContext:
        """Context for the child stored under key."""
        if key == PITCH_LIBRARY_KEY and not self.in_pitch_library:
            return replace(self, in_pitch_library=True)
        return self


@dataclass(frozen=True)
class TransformResult:
    """A transformed tree and the keyed-sequence entry paths found in it."""

    tree: Any
    keyed_paths: tuple[Path, ...] = ()


def transform_section(
    section_index: int,
    node: Any,
    structure: StructureDefinition | Mapping[str, Any],
    path: Path = (),
) -> TransformResult:
    """
    Apply a section's modifiers to its tree.

    Args:
        section_index: Resolved position of the section in the structure
        node: Section tree (or any subtree of it)
        structure: Structure definition supplying the modifiers
        path: Path of node below the section root. If its last segment is
            a reserved key, node is treated as that key's value.

    Returns:
        TransformResult with the new tree and keyed entry paths
        (relative to the section root)

    Raises:
        StructureIndexError: If the structure has no entry for section_index
        MalformedStructureError: If structure is raw data that fails validation
    """
    definition = StructureDefinition.coerce(structure)
    context = TransformContext(section_index, definition.template_for(section_index))
    for segment in path:
        context = context.enter(segment)

    keyed_paths: list[Path] = []
    key = path[-1] if path else None
    tree = _transform_child(key, node, context, path, keyed_paths)
    return TransformResult(tree=tree, keyed_paths=tuple(keyed_paths))


def _transform_child(
    key: PathSegment | None,
    node: Any,
    context: TransformContext,
    path: Path,
    keyed_paths: list[Path],
) -> Any:
    """Apply key-triggered modifiers, then walk the node."""
    if key == DRUMS_KEY and context.template.removes_drums:
        return {}
    return _transform_node(node, context, path, keyed_paths)


def _transform_node(
    node: Any,
    context: TransformContext,
    path: Path,
    keyed_paths: list[Path],
) -> Any:
    kind = node_kind(node)

    if kind == NodeKind.MAPPING:
        return {
            key: _transform_child(key, value, context.enter(key), (*path, key), keyed_paths)
            for key, value in node.items()
        }

    if kind == NodeKind.SEQUENCE:
        return [
            _transform_child(index, item, context, (*path, index), keyed_paths)
            for index, item in enumerate(node)
        ]

    if kind == NodeKind.KEYED_SEQUENCE:
        items = [
            _transform_child(index, item, context, (*path, index), keyed_paths)
            for index, item in enumerate(node)
        ]
        extras = {}
        for key, value in node.extras.items():
            child_path = (*path, key)
            extras[key] = _transform_child(key, value, context.enter(key), child_path, keyed_paths)
            keyed_paths.append(child_path)
        return KeyedSequence(items, extras)

    if kind == NodeKind.SCALAR:
        return _transform_scalar(node, context)

    raise TypeError(f"Unhandled node kind: {kind}")


def _transform_scalar(value: Any, context: TransformContext) -> Any:
    """Transpose numeric leaves inside the pitch library."""
    if context.in_pitch_library and isinstance(value, Number) and not isinstance(value, bool):
        return value + context.template.key_diff
    return value
