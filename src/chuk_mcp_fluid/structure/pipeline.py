"""
Structure pipeline - resolve a score's layout, then transform each section.

    raw sections → resolve_structure → ordered sections
    → transform_section (per position) → StructuredScore
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from chuk_mcp_fluid.models.structure import StructureDefinition
from chuk_mcp_fluid.structure.resolver import resolve_structure, section_names
from chuk_mcp_fluid.structure.transformer import KeyedSequence, Path, transform_section

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructuredScore:
    """
    Result of applying a structure to a score.

    keyed_paths entries start with the section position, followed by the
    path inside that section. JSON has no list with named entries, so
    to_dict writes each keyed entry out separately as a path and value.
    """

    sections: list[Any]
    labels: list[str | int]
    names: list[str]
    keyed_paths: tuple[Path, ...]

    def __len__(self) -> int:
        return len(self.sections)

    def named_sections(self) -> dict[str, Any]:
        """Sections keyed by display name, in playback order."""
        return dict(zip(self.names, self.sections, strict=True))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "labels": list(self.labels),
            "sections": [
                {"name": name, "content": section}
                for name, section in zip(self.names, self.sections, strict=True)
            ],
            "keyed_entries": [
                {"path": list(path), "value": value} for path, value in self.keyed_entries()
            ],
        }

    def keyed_entries(self) -> list[tuple[Path, Any]]:
        """Each keyed path paired with the value stored there."""
        return [(path, _lookup(self.sections, path)) for path in self.keyed_paths]


def _lookup(node: Any, path: Path) -> Any:
    """Follow a path, reading named segments from keyed sequence extras."""
    for segment in path:
        if isinstance(node, KeyedSequence) and isinstance(segment, str):
            node = node.extras[segment]
        else:
            node = node[segment]
    return node


def apply_structure(
    score: Sequence[Any],
    structure: StructureDefinition | Mapping[str, Any],
) -> StructuredScore:
    """
    Lay out a score according to a structure definition.

    Args:
        score: Unique sections of the score
        structure: Structure definition (validated or raw)

    Returns:
        StructuredScore with one transformed section per label

    Raises:
        StructureIndexError: If a label or template index is out of range
        MalformedStructureError: If the structure is invalid
    """
    definition = StructureDefinition.coerce(structure)
    labels = list(definition.labels)

    ordered = resolve_structure(score, labels)
    names = section_names(labels)

    sections: list[Any] = []
    keyed_paths: list[Path] = []
    for position, section in enumerate(ordered):
        result = transform_section(position, section, definition)
        sections.append(result.tree)
        keyed_paths.extend((position, *path) for path in result.keyed_paths)

    logger.debug(
        "Applied structure %s: %d source sections -> %d (%s)",
        definition.name or "<inline>",
        len(score),
        len(sections),
        ", ".join(names),
    )

    return StructuredScore(
        sections=sections,
        labels=labels,
        names=names,
        keyed_paths=tuple(keyed_paths),
    )
