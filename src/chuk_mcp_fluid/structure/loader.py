"""
Structure library - discovers and loads structure definitions.

Structures can come from:
1. Built-in library (shipped with package)
2. Project structures (user's project/structures directory)

Files are YAML or JSON; the structure id is the file stem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from chuk_mcp_fluid.constants import STRUCTURE_EXTENSIONS
from chuk_mcp_fluid.errors import MalformedStructureError, StructureNotFoundError
from chuk_mcp_fluid.models.structure import StructureDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructureMetadata:
    """Summary of a structure for listings."""

    name: str
    description: str
    labels: list[str | int]
    source: str  # "library" or "project"

    @property
    def section_count(self) -> int:
        return len(self.labels)

    @classmethod
    def from_structure(cls, structure: StructureDefinition, source: str) -> StructureMetadata:
        return cls(
            name=structure.name or "",
            description=structure.description,
            labels=list(structure.labels),
            source=source,
        )


class StructureLibrary:
    """
    Discovers and loads structure definitions.

    Project structures override library structures with the same id.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the library.

        Args:
            library_path: Path to built-in structure library
            project_path: Path to project structures directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, StructureDefinition] = {}

    def list_structures(self) -> list[StructureMetadata]:
        """
        List all available structures, project entries taking precedence.

        Files that fail to load are skipped and logged.
        """
        found: dict[str, StructureMetadata] = {}

        for source, directory in self._search_dirs(reverse=True):
            for path in self._structure_files(directory):
                try:
                    structure = self._load_file(path)
                except MalformedStructureError:
                    logger.warning("Skipping malformed structure file: %s", path)
                    continue
                found[path.stem] = StructureMetadata.from_structure(structure, source)

        return sorted(found.values(), key=lambda m: m.name)

    def get_structure(self, structure_id: str) -> StructureDefinition:
        """
        Get a structure by id.

        Raises:
            TypeError: If structure_id is not a string
            StructureNotFoundError: If no file matches the id
            MalformedStructureError: If the file cannot be parsed or validated
        """
        if not isinstance(structure_id, str):
            raise TypeError("structureId should be a string")

        if structure_id in self._cache:
            return self._cache[structure_id]

        path = self.find_structure_file(structure_id)
        if path is None:
            raise StructureNotFoundError(structure_id)

        structure = self._load_file(path)
        self._cache[structure_id] = structure
        return structure

    def find_structure_file(self, structure_id: str) -> Path | None:
        """Locate the file for an id, project first."""
        for _source, directory in self._search_dirs():
            for extension in STRUCTURE_EXTENSIONS:
                candidate = directory / f"{structure_id}{extension}"
                if candidate.is_file():
                    return candidate
        return None

    def clear_cache(self) -> None:
        """Clear the structure cache."""
        self._cache.clear()

    def _search_dirs(self, reverse: bool = False) -> list[tuple[str, Path]]:
        """Existing directories in lookup priority order (project first)."""
        dirs: list[tuple[str, Path]] = []
        if self.project_path and self.project_path.exists():
            dirs.append(("project", self.project_path))
        if self.library_path.exists():
            dirs.append(("library", self.library_path))
        return dirs[::-1] if reverse else dirs

    @staticmethod
    def _structure_files(directory: Path) -> list[Path]:
        files: list[Path] = []
        for extension in STRUCTURE_EXTENSIONS:
            files.extend(directory.glob(f"*{extension}"))
        return sorted(files)

    def _load_file(self, path: Path) -> StructureDefinition:
        """Load and validate a structure file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedStructureError(f"{path.name}: {e}") from e

        logger.debug("Loaded structure file %s", path)
        return StructureDefinition.from_dict(data, name=path.stem)
