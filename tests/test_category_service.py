"""Tests for the category service."""

import pytest

from wedplan.domain.errors import CategoryInUseError, ConflictError, NotFoundError, ValidationError


def test_create_and_get(category_service):
    """Test creating a category."""
    category_id = category_service.create_category("  Flowers & Decor ")
    category = category_service.get_category(category_id)
    assert category.name == "Flowers & Decor"


def test_create_duplicate(category_service, sample_category):
    """Test that category names are unique."""
    with pytest.raises(ConflictError, match="already exists"):
        category_service.create_category("Venue")


def test_create_blank_name(category_service):
    """Test that a blank name is rejected."""
    with pytest.raises(ValidationError):
        category_service.create_category("  ")


def test_list_sorted_by_name(category_service):
    """Test that categories are listed alphabetically."""
    for name in ["Music", "Attire", "Rings"]:
        category_service.create_category(name)
    assert [c.name for c in category_service.list_categories()] == ["Attire", "Music", "Rings"]


def test_rename(category_service, sample_category):
    """Test renaming, including to the same name."""
    renamed = category_service.rename_category(sample_category.id, "Reception venue")
    assert renamed.name == "Reception venue"
    assert category_service.rename_category(sample_category.id, "Reception venue").id == sample_category.id


def test_rename_to_existing(category_service, sample_category):
    """Test that renaming onto another category's name conflicts."""
    category_service.create_category("Catering")
    with pytest.raises(ConflictError):
        category_service.rename_category(sample_category.id, "Catering")


def test_get_unknown(category_service):
    """Test that a missing category raises NotFoundError."""
    with pytest.raises(NotFoundError, match="Category 999 not found"):
        category_service.get_category(999)


def test_delete_unused(category_service, sample_category):
    """Test deleting a category no cost references."""
    category_service.delete_category(sample_category.id)
    assert category_service.get_category_by_name("Venue") is None


def test_delete_in_use(any_db, category_service, sample_cost, sample_category):
    """Test that a referenced category cannot be deleted."""
    with pytest.raises(CategoryInUseError) as exc_info:
        category_service.delete_category(sample_category.id)

    assert exc_info.value.count == 1
    assert "1 cost" in str(exc_info.value)
    assert category_service.get_category(sample_category.id).name == "Venue"


def test_resolve_category(category_service, sample_category):
    """Test resolving categories by ID string or name."""
    assert category_service.resolve_category(str(sample_category.id)) == sample_category.id
    assert category_service.resolve_category("Venue") == sample_category.id
    with pytest.raises(NotFoundError):
        category_service.resolve_category("Honeymoon")
