"""Tests for the placeholder registry."""

import random

import pytest

from mergesmith.registry import (
    LABEL_PALETTE,
    NotFoundError,
    Placeholder,
    PlaceholderRegistry,
    Value,
)


class TestPlaceholderModel:
    """Test placeholder and value models."""

    def test_new_placeholder_is_empty(self):
        """Test a fresh placeholder has no name and no values."""
        placeholder = Placeholder()

        assert placeholder.name == ""
        assert placeholder.values == []
        assert placeholder.id

    def test_ids_are_unique(self):
        """Test ids are assigned per instance."""
        assert Placeholder().id != Placeholder().id
        assert Value().id != Value().id

    def test_marker(self):
        """Test marker text built from the name."""
        assert Placeholder(name="Name").marker == "[Name]"
        assert Placeholder(name="").marker == "[]"

    def test_display_marker_for_unnamed_placeholder(self):
        """Test the display marker hints at a name when empty."""
        assert Placeholder(name="").display_marker == "[Field Name]"
        assert Placeholder(name="Company").display_marker == "[Company]"


class TestPlaceholderMutations:
    """Test adding, renaming and removing placeholders."""

    def test_add_placeholder(self, registry):
        """Test adding a placeholder appends it with a palette label."""
        placeholder = registry.add_placeholder()

        assert len(registry) == 1
        assert registry.get(placeholder.id) is placeholder
        assert placeholder.name == ""
        assert placeholder.values == []
        assert placeholder.label in LABEL_PALETTE

    def test_labels_follow_random_source(self):
        """Test labels are drawn from the injected random source."""
        first = PlaceholderRegistry(rng=random.Random(7))
        second = PlaceholderRegistry(rng=random.Random(7))

        labels_a = [first.add_placeholder().label for _ in range(5)]
        labels_b = [second.add_placeholder().label for _ in range(5)]

        assert labels_a == labels_b

    def test_placeholders_keep_insertion_order(self, registry):
        """Test placeholders are listed in the order they were added."""
        ids = [registry.add_placeholder().id for _ in range(3)]

        assert [p.id for p in registry] == ids
        assert [p.id for p in registry.placeholders] == ids

    def test_rename_placeholder(self, registry):
        """Test renaming sets the name verbatim."""
        placeholder = registry.add_placeholder()

        registry.rename_placeholder(placeholder.id, "  first name.* ")

        assert placeholder.name == "  first name.* "

    def test_rename_accepts_empty_and_duplicate_names(self, registry):
        """Test no validation is applied to names."""
        a = registry.add_placeholder()
        b = registry.add_placeholder()

        registry.rename_placeholder(a.id, "Name")
        registry.rename_placeholder(b.id, "Name")
        assert a.name == b.name == "Name"

        registry.rename_placeholder(a.id, "")
        assert a.name == ""

    def test_remove_placeholder(self, registry):
        """Test removing a placeholder."""
        keep = registry.add_placeholder()
        drop = registry.add_placeholder()

        removed = registry.remove_placeholder(drop.id)

        assert removed is drop
        assert registry.placeholders == [keep]

    def test_remove_unknown_placeholder_is_noop(self, registry):
        """Test lenient registries ignore unknown placeholder ids."""
        registry.add_placeholder()

        assert registry.remove_placeholder("missing") is None
        assert registry.rename_placeholder("missing", "x") is None
        assert len(registry) == 1

    def test_placeholders_property_is_a_copy(self, registry):
        """Test callers cannot mutate the registry through the list."""
        registry.add_placeholder()

        registry.placeholders.clear()

        assert len(registry) == 1


class TestValueMutations:
    """Test adding, editing and removing values."""

    def test_add_value(self, registry):
        """Test a new value is appended with empty text."""
        placeholder = registry.add_placeholder()

        first = registry.add_value(placeholder.id)
        second = registry.add_value(placeholder.id)

        assert placeholder.values == [first, second]
        assert first.text == ""
        assert first.id != second.id

    def test_update_value(self, registry):
        """Test editing a value's text."""
        placeholder = registry.add_placeholder()
        value = registry.add_value(placeholder.id)

        registry.update_value(placeholder.id, value.id, "Ann")

        assert placeholder.values[0].text == "Ann"

    def test_remove_value_collapses_positions(self, registry):
        """Test later values shift down one position."""
        placeholder = registry.add_placeholder()
        values = [registry.add_value(placeholder.id) for _ in range(3)]
        for value, text in zip(values, ["a", "b", "c"]):
            registry.update_value(placeholder.id, value.id, text)

        registry.remove_value(placeholder.id, values[0].id)

        assert placeholder.value_texts() == ["b", "c"]

    def test_value_mutations_on_unknown_ids_are_noops(self, registry):
        """Test lenient registries ignore unknown placeholder and value ids."""
        placeholder = registry.add_placeholder()
        registry.add_value(placeholder.id)

        assert registry.add_value("missing") is None
        assert registry.update_value(placeholder.id, "missing", "x") is None
        assert registry.update_value("missing", "missing", "x") is None
        assert registry.remove_value(placeholder.id, "missing") is None
        assert placeholder.value_texts() == [""]

    def test_value_from_other_placeholder_is_not_found(self, registry):
        """Test value ids are scoped to their placeholder."""
        a = registry.add_placeholder()
        b = registry.add_placeholder()
        value = registry.add_value(a.id)

        assert registry.remove_value(b.id, value.id) is None
        assert len(a.values) == 1


class TestStrictRegistry:
    """Test strict registries raise on unknown ids."""

    def test_strict_unknown_placeholder(self):
        """Test NotFoundError for a missing placeholder."""
        registry = PlaceholderRegistry(strict=True)

        with pytest.raises(NotFoundError):
            registry.rename_placeholder("missing", "Name")
        with pytest.raises(NotFoundError):
            registry.remove_placeholder("missing")
        with pytest.raises(NotFoundError):
            registry.add_value("missing")

    def test_strict_unknown_value(self):
        """Test NotFoundError for a missing value."""
        registry = PlaceholderRegistry(strict=True)
        placeholder = registry.add_placeholder()

        with pytest.raises(NotFoundError):
            registry.update_value(placeholder.id, "missing", "x")
        with pytest.raises(NotFoundError):
            registry.remove_value(placeholder.id, "missing")


class TestMappingConversion:
    """Test building registries from plain mappings."""

    def test_from_mapping(self):
        """Test one placeholder per key, values in order."""
        registry = PlaceholderRegistry.from_mapping({"Name": ["Ann", "Bob"], "Empty": []})

        assert registry.to_mapping() == [("Name", ["Ann", "Bob"]), ("Empty", [])]

    def test_from_pairs_allows_duplicate_names(self):
        """Test an iterable of pairs can carry the same name twice."""
        registry = PlaceholderRegistry.from_mapping([("Name", ["a"]), ("Name", ["b"])])

        assert len(registry) == 2

    def test_from_mapping_passes_strict(self):
        """Test the strict flag reaches the new registry."""
        registry = PlaceholderRegistry.from_mapping({"Name": ["Ann"]}, strict=True)

        with pytest.raises(NotFoundError):
            registry.add_value("missing")
