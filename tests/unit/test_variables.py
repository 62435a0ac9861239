"""Tests for VariableCollection flattening and reference resolution."""

import pytest

from modetokens.core.errors import (
    CollectionFinalizedError,
    DuplicateVariableError,
    UndefinedReferenceError,
)
from modetokens.core.expressions import alpha, get
from modetokens.core.ir import DeferredValue
from modetokens.core.modes import ModeCollection
from modetokens.core.variables import VariableCollection


def make_collection(*trees, mode="light", prefix="colors", strict=True) -> VariableCollection:
    collection = VariableCollection(mode, prefix, strict=strict)
    collection.add_overlays(trees)
    return collection


class TestFlatten:
    def test_names_and_paths(self):
        collection = make_collection({"btn": {"primary": {"bg": "#2ea44f"}}})
        variable = collection.get_by_name("colors-btn.primary.bg")
        assert variable is not None
        assert variable.value == "#2ea44f"
        assert variable.path == ("btn", "primary", "bg")
        assert variable.mode == "light"

    def test_iteration_follows_declaration_order(self):
        collection = make_collection({"b": "1", "a": {"z": "2", "y": "3"}, "c": "4"})
        assert [v.name for v in collection] == [
            "colors-b",
            "colors-a.z",
            "colors-a.y",
            "colors-c",
        ]

    def test_sequences_are_opaque_leaves(self):
        collection = make_collection({"scale": {"gray": ["#fafbfc", "#f6f8fa"]}})
        assert collection.names() == ["colors-scale.gray"]
        assert collection.get_by_path("scale.gray").value == ["#fafbfc", "#f6f8fa"]

    def test_numeric_keys_are_stringified(self):
        collection = make_collection({"space": {0: "0px", 1: "4px"}}, prefix="spacing")
        assert "spacing-space.0" in collection
        assert collection.get_by_name("spacing-space.1").path == ("space", "1")

    def test_lookup_miss_returns_none(self):
        collection = make_collection({"fg": "#000"})
        assert collection.get_by_name("colors-bg") is None
        assert len(collection) == 1

    def test_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            VariableCollection("light", "colors").add_from_object(["#fff"])  # type: ignore[arg-type]


class TestReferences:
    def test_backward_reference_copies_resolved_value(self):
        collection = make_collection(
            {"scale": {"black": "#1b1f23"}, "fg": {"default": get("scale.black")}}
        )
        assert collection.get_by_name("colors-fg.default").value == "#1b1f23"

    def test_reference_chain(self):
        collection = make_collection(
            {"a": "#111111", "b": get("a"), "c": get("b")},
        )
        assert collection.get_by_name("colors-c").value == "#111111"

    def test_forward_reference_is_undefined(self):
        with pytest.raises(UndefinedReferenceError) as exc_info:
            make_collection({"fg": get("scale.white"), "scale": {"white": "#fff"}})
        assert exc_info.value.name == "colors-scale.white"
        assert exc_info.value.mode == "light"
        assert exc_info.value.referrer == "colors-fg"

    def test_unknown_reference_is_undefined(self):
        with pytest.raises(UndefinedReferenceError, match="colors-nope"):
            make_collection({"fg": get("nope")})

    def test_reference_indexes_into_sequence_leaf(self):
        collection = make_collection(
            {"scale": {"gray": ["#fafbfc", "#f6f8fa", "#e1e4e8"]}, "muted": get("scale.gray.2")}
        )
        assert collection.get_by_name("colors-muted").value == "#e1e4e8"

    def test_sequence_index_out_of_range(self):
        with pytest.raises(UndefinedReferenceError):
            make_collection({"scale": {"gray": ["#fafbfc"]}, "muted": get("scale.gray.5")})

    def test_strings_are_not_indexable(self):
        with pytest.raises(UndefinedReferenceError):
            make_collection({"black": "#000", "x": get("black.0")})

    def test_reference_across_overlays(self):
        collection = make_collection(
            {"scale": {"black": "#000000"}},
            {"fg": {"default": get("scale.black")}},
        )
        assert collection.get_by_name("colors-fg.default").value == "#000000"

    def test_deferred_values_are_carried_through(self):
        backdrop = alpha(get("scale.black"), 0.5)
        collection = make_collection(
            {"scale": {"black": "#1b1f23"}, "backdrop": backdrop, "overlay": get("backdrop")}
        )
        assert collection.get_by_name("colors-backdrop").value is backdrop
        assert collection.get_by_name("colors-overlay").value is backdrop
        assert collection.get_by_name("colors-overlay").is_deferred

    def test_plain_callables_are_deferred(self):
        collection = make_collection({"shadow": lambda theme: "none"})
        value = collection.get_by_name("colors-shadow").value
        assert isinstance(value, DeferredValue)
        assert value({}) == "none"


class TestOverlays:
    def test_later_overlay_wins_and_keeps_position(self):
        collection = make_collection({"a": "1", "b": "2"}, {"a": "3", "c": "4"})
        assert [(v.name, v.value) for v in collection] == [
            ("colors-a", "3"),
            ("colors-b", "2"),
            ("colors-c", "4"),
        ]

    def test_duplicate_within_one_overlay_is_rejected(self):
        with pytest.raises(DuplicateVariableError, match="colors-a.b"):
            make_collection({"a.b": "x", "a": {"b": "y"}})

    def test_duplicate_within_one_overlay_overwrites_when_not_strict(self, caplog):
        collection = make_collection({"a.b": "x", "a": {"b": "y"}}, strict=False)
        assert collection.get_by_name("colors-a.b").value == "y"
        assert "declared twice" in caplog.text


class TestTree:
    def test_round_trip(self):
        tree = {
            "scale": {"black": "#1b1f23", "gray": ["#fafbfc", "#f6f8fa"]},
            "btn": {"primary": {"bg": "#2ea44f", "text": "#fff"}, "radius": 6},
        }
        assert make_collection(tree).tree() == tree

    def test_round_trip_keeps_shape_with_references(self):
        collection = make_collection({"a": "#000", "b": {"c": get("a")}})
        assert collection.tree() == {"a": "#000", "b": {"c": "#000"}}

    def test_tree_leaves_are_copies(self):
        collection = make_collection({"scale": {"gray": ["#fafbfc", "#f6f8fa"]}})
        collection.finalize()
        collection.tree()["scale"]["gray"].append("#000000")
        assert collection.get_by_path("scale.gray").value == ["#fafbfc", "#f6f8fa"]


class TestShapeChangingOverlays:
    def test_group_replaces_leaf(self):
        collection = make_collection({"a": "#000", "z": "1"}, {"a": {"b": "#fff"}})
        assert collection.names() == ["colors-z", "colors-a.b"]
        assert collection.tree() == {"z": "1", "a": {"b": "#fff"}}

    def test_deeper_group_replaces_leaf(self):
        collection = make_collection({"a": "#000"}, {"a": {"b": {"c": "#fff"}}})
        assert collection.names() == ["colors-a.b.c"]
        assert collection.tree() == {"a": {"b": {"c": "#fff"}}}

    def test_leaf_replaces_group(self):
        collection = make_collection(
            {"a": {"b": "#fff", "c": {"d": "#eee"}}, "z": "1"}, {"a": "#000"}
        )
        assert collection.names() == ["colors-z", "colors-a"]
        assert collection.tree() == {"z": "1", "a": "#000"}

    def test_unrelated_dotted_key_is_kept(self):
        collection = make_collection({"a.b": "#111"}, {"a": {"b": {"c": "#222"}}})
        assert collection.get_by_name("colors-a.b").value == "#111"
        assert collection.tree() == {"a.b": "#111", "a": {"b": {"c": "#222"}}}

    def test_modes_built_from_shape_changing_overlays_render(self):
        modes = ModeCollection("colors", "colors")
        for name in ("light", "dark"):
            collection = make_collection({"a": "#000"}, {"a": {"b": "#fff"}}, mode=name)
            modes.add(name, collection)
        assert modes.validate().is_valid
        for _, collection in modes:
            assert collection.tree() == {"a": {"b": "#fff"}}


class TestLifecycle:
    def test_add_after_finalize_is_rejected(self):
        collection = make_collection({"a": "1"})
        collection.finalize()
        collection.finalize()
        assert collection.is_finalized
        with pytest.raises(CollectionFinalizedError):
            collection.add_from_object({"b": "2"})

    def test_reads_after_finalize(self):
        collection = make_collection({"a": "1"})
        collection.finalize()
        assert collection.get_by_name("colors-a").value == "1"
        assert collection.tree() == {"a": "1"}
