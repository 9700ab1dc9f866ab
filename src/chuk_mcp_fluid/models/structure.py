"""
Structure definition model - how a score is laid out in time.

A structure definition contains:
- One or more layouts, each an ordered list of labels (section indices
  or the reserved 'unique_intro' / 'unique_outro' tokens)
- One template entry per resolved section position, holding the
  modifiers applied to that section (transposition, drum presence)

Structure files are hand-written YAML/JSON, so numeric fields accept
numeric strings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from chuk_mcp_fluid.errors import MalformedStructureError, StructureIndexError


class SectionTemplate(BaseModel):
    """
    Per-section modifiers.

    key_diff is a semitone transposition applied to the pitch library.
    A drums_delta of exactly 0 removes the drums; any other value keeps them.
    """

    key_diff: int = Field(..., description="Semitone transposition for the pitch library")
    drums_delta: int = Field(..., alias="drums-delta", description="0 removes drums")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def removes_drums(self) -> bool:
        """True if this section drops its drum subtree."""
        return self.drums_delta == 0

    def to_dict(self) -> dict[str, int]:
        """Convert to the wire format."""
        return {"key_diff": self.key_diff, "drums-delta": self.drums_delta}


class StructureLayout(BaseModel):
    """An ordered list of section labels."""

    labels: list[str | int] = Field(..., description="Section labels in playback order")

    model_config = {"frozen": True}


class StructureDefinition(BaseModel):
    """
    A complete structure definition.

    Only the first layout in `structure` is used for resolution; further
    layouts are kept so definitions round-trip unchanged.
    """

    name: str | None = Field(None, description="Structure id")
    description: str = Field("", description="Human-readable description")
    structure: list[StructureLayout] = Field(..., min_length=1, description="Layouts")
    sections: list[list[SectionTemplate]] = Field(
        default_factory=list, description="Template entry per resolved section"
    )

    model_config = {"frozen": True}

    @field_validator("sections")
    @classmethod
    def validate_sections(cls, v: list[list[SectionTemplate]]) -> list[list[SectionTemplate]]:
        """Every section position needs at least one template entry."""
        for position, entries in enumerate(v):
            if not entries:
                raise ValueError(f"section {position} has no template entry")
        return v

    @property
    def labels(self) -> list[str | int]:
        """Labels of the primary layout."""
        return self.structure[0].labels

    def template_for(self, section_index: int) -> SectionTemplate:
        """
        Get the modifiers for a resolved section position.

        Raises:
            StructureIndexError: If there is no entry for that position
        """
        if not 0 <= section_index < len(self.sections):
            raise StructureIndexError(section_index, len(self.sections))
        return self.sections[section_index][0]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "name": self.name,
            "description": self.description,
            "structure": [{"labels": list(layout.labels)} for layout in self.structure],
            "sections": [[entry.to_dict() for entry in entries] for entries in self.sections],
        }

    @classmethod
    def from_dict(cls, data: Any, name: str | None = None) -> StructureDefinition:
        """
        Validate a raw structure definition.

        Args:
            data: Parsed structure (from YAML/JSON)
            name: Optional id, used when the data carries none

        Raises:
            MalformedStructureError: If required fields are missing or invalid
        """
        if not isinstance(data, Mapping):
            raise MalformedStructureError(f"expected a mapping, got {type(data).__name__}")

        payload = dict(data)
        if name is not None and not payload.get("name"):
            payload["name"] = name

        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise MalformedStructureError(_summarize(e)) from e

    @classmethod
    def coerce(cls, value: StructureDefinition | Mapping[str, Any]) -> StructureDefinition:
        """Accept either a validated definition or raw data."""
        if isinstance(value, cls):
            return value
        return cls.from_dict(value)


def _summarize(error: ValidationError) -> str:
    """One-line description of a pydantic validation error."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(loc) for loc in detail["loc"]) or "<root>"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)
