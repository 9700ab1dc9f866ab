"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in structure library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_fluid" / "structure" / "library"


@pytest.fixture
def four_sections() -> list[dict[str, Any]]:
    """Intro, verse, chorus and outro, each with a pitch library and drums."""
    return [
        {
            "name": "intro",
            "nLibrary": {"root": 36, "fifth": 43, "label": "pad"},
            "drums": {"k": 36, "pattern": "k...k..."},
        },
        {
            "name": "verse",
            "nLibrary": {"root": 40, "chord": [40, 44, 47]},
            "drums": {"k": 36, "s": 38},
        },
        {
            "name": "chorus",
            "nLibrary": {"root": 45, "chord": [45, 49, 52]},
            "drums": {"k": 36, "s": 38, "h": 42},
        },
        {
            "name": "outro",
            "nLibrary": {"root": 36},
            "drums": {"k": 36},
        },
    ]


@pytest.fixture
def verse_chorus_structure() -> dict[str, Any]:
    """Raw structure definition: intro, A, B, A, B, outro."""
    return {
        "name": "verse-chorus",
        "structure": [{"labels": ["unique_intro", "0", "1", "0", "1", "unique_outro"]}],
        "sections": [
            [{"key_diff": 0, "drums-delta": 0}],
            [{"key_diff": 0, "drums-delta": 1}],
            [{"key_diff": 0, "drums-delta": 1}],
            [{"key_diff": 0, "drums-delta": 1}],
            [{"key_diff": 2, "drums-delta": 0}],
            [{"key_diff": 0, "drums-delta": 0}],
        ],
    }
