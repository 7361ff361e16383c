"""
Tests for favorites reconciliation.

This module tests:
- FavoritesSet ordering, membership and immutability
- toggle_favorite as an involution on membership
- FavoritesReconciler write-through and best-effort persistence
"""

from unittest.mock import Mock

import pytest

from conftest import make_summary
from recipes.favorites import FavoritesReconciler, FavoritesSet, toggle_favorite
from recipes.models import RecipeSummary
from recipes.storage import InMemoryFavoritesStore, decode_favorites


class FailingStore(InMemoryFavoritesStore):
    """Store whose writes always fail."""

    def _write(self, payload: str) -> None:
        raise OSError("disk full")


class ExplodingStore:
    """Custom store that does not follow the never-raise contract on save."""

    def __init__(self) -> None:
        self.saves = 0

    def load(self) -> FavoritesSet:
        return FavoritesSet()

    def save(self, favorites: FavoritesSet) -> None:
        self.saves += 1
        raise RuntimeError("database is locked")


class TestFavoritesSet:
    """Test cases for FavoritesSet."""

    def test_empty_set(self):
        """Test that a new set is empty."""
        favorites = FavoritesSet()
        assert len(favorites) == 0
        assert favorites.ids() == []
        assert "52772" not in favorites

    def test_insertion_order_preserved(self):
        """Test that members iterate in insertion order."""
        favorites = FavoritesSet([make_summary("3"), make_summary("1"), make_summary("2")])
        assert favorites.ids() == ["3", "1", "2"]
        assert [r.id for r in favorites] == ["3", "1", "2"]

    def test_duplicate_ids_keep_first(self):
        """Test that duplicate ids are collapsed to the first occurrence."""
        favorites = FavoritesSet([make_summary("1", "First"), make_summary("1", "Second")])
        assert len(favorites) == 1
        assert favorites.to_list()[0].name == "First"

    def test_details_stored_as_summaries(self, teriyaki_detail):
        """Test that details are projected onto summaries."""
        favorites = FavoritesSet([teriyaki_detail])
        stored = favorites.to_list()[0]
        assert type(stored) is RecipeSummary
        assert stored.id == "52772"
        assert stored.category == "Chicken"

    def test_toggled_returns_new_set(self):
        """Test that toggled() never mutates the original set."""
        original = FavoritesSet([make_summary("1")])
        updated = original.toggled(make_summary("2"))
        assert original.ids() == ["1"]
        assert updated.ids() == ["1", "2"]

    def test_equality_is_order_sensitive(self):
        """Test that equal sets have the same members in the same order."""
        a = FavoritesSet([make_summary("1"), make_summary("2")])
        b = FavoritesSet([make_summary("1"), make_summary("2")])
        c = FavoritesSet([make_summary("2"), make_summary("1")])
        assert a == b
        assert a != c


class TestToggleFavorite:
    """Test cases for the pure toggle function."""

    def test_toggle_on_empty_then_again(self):
        """Test toggling 52772 on an empty set and back."""
        recipe = RecipeSummary(id="52772", name="Teriyaki Chicken Casserole")

        once = toggle_favorite(FavoritesSet(), recipe)
        assert once.ids() == ["52772"]
        assert once.to_list() == [recipe]

        twice = toggle_favorite(once, recipe)
        assert twice.ids() == []
        assert len(twice) == 0

    @pytest.mark.parametrize("target", ["1", "2", "3", "new"])
    def test_toggle_is_an_involution_on_membership(self, target):
        """Test that toggling twice restores the same members."""
        original = FavoritesSet([make_summary("1"), make_summary("2"), make_summary("3")])
        recipe = make_summary(target)
        once = toggle_favorite(original, recipe)
        twice = toggle_favorite(once, recipe)

        assert (target in once) is (target not in original)
        assert sorted(twice.ids()) == sorted(original.ids())

    def test_add_then_remove_restores_order(self):
        """Test that adding and removing a new recipe restores the exact set."""
        original = FavoritesSet([make_summary("1"), make_summary("2")])
        recipe = make_summary("3")
        assert toggle_favorite(toggle_favorite(original, recipe), recipe) == original

    def test_remove_keeps_order_of_others(self):
        """Test that removal leaves the remaining order unchanged."""
        original = FavoritesSet([make_summary("1"), make_summary("2"), make_summary("3")])
        assert toggle_favorite(original, make_summary("2")).ids() == ["1", "3"]

    def test_removing_middle_then_readding_appends(self):
        """Test that re-adding a removed recipe appends it at the end."""
        original = FavoritesSet([make_summary("1"), make_summary("2"), make_summary("3")])
        removed = toggle_favorite(original, make_summary("1"))
        assert toggle_favorite(removed, make_summary("1")).ids() == ["2", "3", "1"]


class TestFavoritesReconciler:
    """Test cases for FavoritesReconciler."""

    def test_seeded_from_store(self):
        """Test that the initial set comes from store.load()."""
        store = InMemoryFavoritesStore('[{"idMeal": "52772", "strMeal": "Teriyaki Chicken Casserole"}]')
        reconciler = FavoritesReconciler(store)
        assert reconciler.favorites.ids() == ["52772"]
        assert reconciler.is_favorite("52772")

    def test_is_favorite_tracks_every_toggle(self):
        """Test membership immediately after each toggle."""
        reconciler = FavoritesReconciler(InMemoryFavoritesStore())
        recipe = make_summary("52772")

        assert reconciler.is_favorite("52772") is False
        reconciler.toggle_favorite(recipe)
        assert reconciler.is_favorite("52772") is True
        reconciler.toggle_favorite(recipe)
        assert reconciler.is_favorite("52772") is False
        assert reconciler.is_favorite("never-seen") is False

    def test_every_toggle_writes_through(self):
        """Test that the store holds the new set after each toggle."""
        store = InMemoryFavoritesStore()
        reconciler = FavoritesReconciler(store)

        reconciler.toggle_favorite(make_summary("1"))
        assert decode_favorites(store.payload).ids() == ["1"]

        reconciler.toggle_favorite(make_summary("2"))
        assert decode_favorites(store.payload).ids() == ["1", "2"]

        reconciler.toggle_favorite(make_summary("1"))
        assert decode_favorites(store.payload).ids() == ["2"]

    def test_save_called_once_per_toggle(self):
        """Test write-through with a mock store."""
        store = Mock()
        store.load.return_value = FavoritesSet()
        reconciler = FavoritesReconciler(store)

        result = reconciler.toggle_favorite(make_summary("1"))

        store.save.assert_called_once_with(result)
        assert result is reconciler.favorites

    def test_failing_store_keeps_in_memory_set(self):
        """Test that a failed write does not roll back the toggle."""
        reconciler = FavoritesReconciler(FailingStore())

        reconciler.toggle_favorite(make_summary("1"))
        reconciler.toggle_favorite(make_summary("2"))

        assert reconciler.favorites.ids() == ["1", "2"]
        assert reconciler.is_favorite("2")

    def test_store_raising_on_save_is_contained(self):
        """Test that exceptions escaping a custom store are logged, not raised."""
        store = ExplodingStore()
        reconciler = FavoritesReconciler(store)

        reconciler.toggle_favorite(make_summary("1"))

        assert store.saves == 1
        assert reconciler.favorites.ids() == ["1"]

    def test_toggle_detail_from_detail_view(self, teriyaki_detail):
        """Test favoriting the recipe shown in the detail view."""
        reconciler = FavoritesReconciler(InMemoryFavoritesStore())
        reconciler.toggle_favorite(teriyaki_detail)
        assert reconciler.favorites.to_list() == [teriyaki_detail.to_summary()]
