"""
Tests for the tree transformer.

Tests cover:
- Pitch library transposition at any depth
- Drum removal and retention
- Shape preservation and purity
- Keyed sequences
- Node classification
"""

import copy
from fractions import Fraction

import pytest

from chuk_mcp_fluid.errors import MalformedStructureError, StructureIndexError
from chuk_mcp_fluid.models import StructureDefinition
from chuk_mcp_fluid.structure import (
    KeyedSequence,
    NodeKind,
    node_kind,
    transform_section,
)


def make_structure(*entries: tuple[int, int]) -> StructureDefinition:
    """Structure with one (key_diff, drums-delta) entry per section."""
    return StructureDefinition.from_dict(
        {
            "structure": [{"labels": [str(i) for i in range(len(entries))]}],
            "sections": [[{"key_diff": k, "drums-delta": d}] for k, d in entries],
        }
    )


class TestNodeKind:
    """Tests for node classification."""

    def test_kinds(self) -> None:
        assert node_kind({"a": 1}) == NodeKind.MAPPING
        assert node_kind([1, 2]) == NodeKind.SEQUENCE
        assert node_kind((1, 2)) == NodeKind.SEQUENCE
        assert node_kind(KeyedSequence([1], {"r": "1234"})) == NodeKind.KEYED_SEQUENCE
        assert node_kind("c4") == NodeKind.SCALAR
        assert node_kind(60) == NodeKind.SCALAR
        assert node_kind(None) == NodeKind.SCALAR


class TestPitchLibrary:
    """Tests for nLibrary transposition."""

    def test_transposes_numeric_leaves(self) -> None:
        structure = make_structure((3, 1))
        section = {"nLibrary": {"a": 60, "b": [62, 64], "c": {"deep": [[67]]}}}
        result = transform_section(0, section, structure)
        assert result.tree == {"nLibrary": {"a": 63, "b": [65, 67], "c": {"deep": [[70]]}}}

    def test_non_numeric_leaves_untouched(self) -> None:
        structure = make_structure((5, 1))
        section = {"nLibrary": {"n": 60, "name": "pad", "flag": True, "none": None, "s": "60"}}
        result = transform_section(0, section, structure)
        assert result.tree == {
            "nLibrary": {"n": 65, "name": "pad", "flag": True, "none": None, "s": "60"}
        }

    def test_numbers_outside_library_untouched(self) -> None:
        structure = make_structure((7, 1))
        section = {"tempo": 120, "nLibrary": [48], "notes": [{"n": 60}]}
        result = transform_section(0, section, structure)
        assert result.tree == {"tempo": 120, "nLibrary": [55], "notes": [{"n": 60}]}

    def test_nested_library_key(self) -> None:
        """The marker is recognised at any depth."""
        structure = make_structure((-2, 1))
        section = {"tracks": [{"lead": {"nLibrary": {"x": 60}, "gain": 0.5}}]}
        result = transform_section(0, section, structure)
        assert result.tree == {"tracks": [{"lead": {"nLibrary": {"x": 58}, "gain": 0.5}}]}

    def test_library_value_is_a_number(self) -> None:
        structure = make_structure((1, 1))
        result = transform_section(0, {"nLibrary": 60}, structure)
        assert result.tree == {"nLibrary": 61}

    def test_floats_and_fractions(self) -> None:
        structure = make_structure((2, 1))
        result = transform_section(0, {"nLibrary": [0.5, Fraction(1, 2)]}, structure)
        assert result.tree == {"nLibrary": [2.5, Fraction(5, 2)]}

    def test_only_substring_is_not_marker(self) -> None:
        """Keys merely containing 'nLibrary' are ordinary keys."""
        structure = make_structure((4, 1))
        section = {"nLibraryBackup": {"a": 60}, "my.nLibrary": [60]}
        result = transform_section(0, section, structure)
        assert result.tree == section

    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_zero_diff_is_identity(self, index: int) -> None:
        structure = make_structure((0, 1), (0, 1), (0, 1))
        section = {"nLibrary": {"a": [60, 62], "b": "x"}, "drums": {"k": 36}}
        assert transform_section(index, section, structure).tree == section

    def test_uses_section_index(self) -> None:
        structure = make_structure((0, 1), (12, 1))
        section = {"nLibrary": [60]}
        assert transform_section(0, section, structure).tree == {"nLibrary": [60]}
        assert transform_section(1, section, structure).tree == {"nLibrary": [72]}


class TestDrums:
    """Tests for drum removal."""

    def test_zero_delta_removes(self) -> None:
        structure = make_structure((0, 0))
        section = {"drums": {"k": 36, "pattern": ["k", "s"], "nested": {"a": [1]}}, "keep": 1}
        result = transform_section(0, section, structure)
        assert result.tree == {"drums": {}, "keep": 1}

    def test_zero_delta_removes_any_shape(self) -> None:
        structure = make_structure((0, 0))
        for value in ([1, 2, 3], "k...", 36, None):
            assert transform_section(0, {"drums": value}, structure).tree == {"drums": {}}

    @pytest.mark.parametrize("delta", [1, -1, 2])
    def test_nonzero_delta_keeps(self, delta: int) -> None:
        structure = make_structure((0, delta))
        section = {"drums": {"k": 36, "pattern": ["k", "s"]}}
        result = transform_section(0, section, structure)
        assert result.tree == section

    def test_nested_drums(self) -> None:
        structure = make_structure((0, 0))
        section = {"layers": [{"drums": [36, 38]}, {"bass": [40]}]}
        result = transform_section(0, section, structure)
        assert result.tree == {"layers": [{"drums": {}}, {"bass": [40]}]}

    def test_drums_inside_library_removed(self) -> None:
        structure = make_structure((2, 0))
        section = {"nLibrary": {"root": 40, "drums": {"k": 36}}}
        result = transform_section(0, section, structure)
        assert result.tree == {"nLibrary": {"root": 42, "drums": {}}}

    def test_kept_drums_inside_library_transposed(self) -> None:
        structure = make_structure((2, 1))
        section = {"nLibrary": {"drums": {"k": 36}}}
        result = transform_section(0, section, structure)
        assert result.tree == {"nLibrary": {"drums": {"k": 38}}}


class TestPurity:
    """The transform builds new trees and never mutates its input."""

    def test_input_not_mutated(self) -> None:
        structure = make_structure((5, 0))
        section = {
            "nLibrary": {"a": [60, 62]},
            "drums": {"k": 36},
            "seq": KeyedSequence([1], {"nLibrary": [60]}),
        }
        before = copy.deepcopy(section)
        transform_section(0, section, structure)
        assert section == before
        assert section["seq"].extras == {"nLibrary": [60]}

    def test_new_containers(self) -> None:
        structure = make_structure((0, 1))
        section = {"a": [1, 2], "b": {"c": 3}}
        result = transform_section(0, section, structure)
        assert result.tree == section
        assert result.tree is not section
        assert result.tree["a"] is not section["a"]
        assert result.tree["b"] is not section["b"]

    def test_repeatable(self) -> None:
        structure = make_structure((3, 0))
        section = {"nLibrary": [60], "drums": [1]}
        first = transform_section(0, section, structure)
        second = transform_section(0, section, structure)
        assert first == second

    def test_tuples_become_lists(self) -> None:
        structure = make_structure((1, 1))
        result = transform_section(0, {"nLibrary": (60, 62)}, structure)
        assert result.tree == {"nLibrary": [61, 63]}


class TestKeyedSequences:
    """Tests for sequences carrying named entries."""

    def test_extras_transformed_and_reported(self) -> None:
        structure = make_structure((2, 1))
        section = {"nLibrary": KeyedSequence([60, 62], {"r": "1234", "alt": 64})}
        result = transform_section(0, section, structure)

        seq = result.tree["nLibrary"]
        assert isinstance(seq, KeyedSequence)
        assert list(seq) == [62, 64]
        assert seq.extras == {"r": "1234", "alt": 66}
        assert result.keyed_paths == (("nLibrary", "r"), ("nLibrary", "alt"))

    def test_nested_extras_reported_in_order(self) -> None:
        """Inner entries are reported before the entry that contains them."""
        structure = make_structure((0, 1))
        inner = KeyedSequence([], {"x": 1})
        section = {"notes": KeyedSequence([inner], {"r": "12"})}
        result = transform_section(0, section, structure)
        assert result.keyed_paths == (("notes", 0, "x"), ("notes", "r"))

    def test_extra_marker_key(self) -> None:
        """Markers also apply when attached as a named entry."""
        structure = make_structure((1, 0))
        section = KeyedSequence([{"n": 60}], {"nLibrary": [60], "drums": [36]})
        result = transform_section(0, section, structure)
        assert result.tree.extras == {"nLibrary": [61], "drums": {}}
        assert list(result.tree) == [{"n": 60}]

    def test_plain_sequences_report_nothing(self) -> None:
        structure = make_structure((0, 1))
        result = transform_section(0, {"a": [[1], [2]]}, structure)
        assert result.keyed_paths == ()

    def test_independent_calls_do_not_share_paths(self) -> None:
        structure = make_structure((0, 1))
        section = {"s": KeyedSequence([], {"r": "1"})}
        first = transform_section(0, section, structure)
        second = transform_section(0, section, structure)
        assert first.keyed_paths == second.keyed_paths == (("s", "r"),)

    def test_equality(self) -> None:
        assert KeyedSequence([1], {"a": 1}) == KeyedSequence([1], {"a": 1})
        assert KeyedSequence([1], {"a": 1}) != KeyedSequence([1], {"a": 2})
        assert KeyedSequence([1]) == [1]


class TestPathArgument:
    """Tests for starting the walk below the section root."""

    def test_start_inside_library(self) -> None:
        structure = make_structure((3, 1))
        result = transform_section(0, {"a": 60}, structure, path=("nLibrary",))
        assert result.tree == {"a": 63}

    def test_start_at_drums(self) -> None:
        structure = make_structure((0, 0))
        result = transform_section(0, {"k": 36}, structure, path=("layers", 0, "drums"))
        assert result.tree == {}

    def test_keyed_paths_include_prefix(self) -> None:
        structure = make_structure((0, 1))
        result = transform_section(0, KeyedSequence([], {"r": "1"}), structure, path=("notes",))
        assert result.keyed_paths == (("notes", "r"),)


class TestStructureInput:
    """Tests for the structure argument."""

    def test_raw_mapping_accepted(self) -> None:
        raw = {
            "structure": [{"labels": ["0"]}],
            "sections": [[{"key_diff": "4", "drums-delta": "1"}]],
        }
        assert transform_section(0, {"nLibrary": [60]}, raw).tree == {"nLibrary": [64]}

    def test_missing_section_entry(self) -> None:
        structure = make_structure((0, 1))
        with pytest.raises(StructureIndexError):
            transform_section(1, {}, structure)

    def test_malformed_structure(self) -> None:
        with pytest.raises(MalformedStructureError):
            transform_section(0, {}, {"structure": [{"labels": ["0"]}], "sections": [[{}]]})

    def test_unknown_keys_ignored(self) -> None:
        structure = make_structure((9, 0))
        section = {"automation": {"volume": [0.1, 0.9]}, "r": "1234", "unknownMarker": [1]}
        assert transform_section(0, section, structure).tree == section
