"""
Tests for the generic MongoDB repository.

These tests cover:
- Create / get / update / replace / delete with error reasons
- Paginated query metadata
- Literal, case-insensitive pattern search
"""

import pytest


@pytest.fixture
def recipes(mock_recipes_db):
    from recipe_api.repositories import recipe_repository

    return recipe_repository(mock_recipes_db)


def recipe_data(title: str, category: str = "Dessert", **extra) -> dict:
    return {
        "title": title,
        "ingredients": ["flour"],
        "servings": "2",
        "instructions": ["Bake."],
        "category": category,
        **extra,
    }


# =============================================================================
# CRUD
# =============================================================================

class TestCreateAndGet:
    """Tests for create, get_by_id and get_by_key."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_roundtrips(self, recipes):
        """A created entity should be retrievable by its new id."""
        created = await recipes.create(recipe_data("Muffin"))

        fetched = await recipes.get_by_id(created.id)

        assert created.id
        assert fetched == created

    @pytest.mark.asyncio
    async def test_create_ignores_client_supplied_id(self, recipes):
        created = await recipes.create(recipe_data("Muffin", id="507f1f77bcf86cd799439011"))

        assert created.id != "507f1f77bcf86cd799439011"

    @pytest.mark.asyncio
    async def test_duplicate_natural_key_is_rejected(self, recipes):
        """A second recipe with the same title should fail with DUPLICATE_KEY."""
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        await recipes.create(recipe_data("Muffin"))

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.create(recipe_data("Muffin"))

        assert exc_info.value.reason is RepositoryErrorReason.DUPLICATE_KEY
        assert exc_info.value.cause is not None

    @pytest.mark.asyncio
    async def test_invalid_payload_is_rejected(self, recipes):
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.create({"title": "No ingredients"})

        assert exc_info.value.reason is RepositoryErrorReason.INVALID

    @pytest.mark.asyncio
    @pytest.mark.parametrize("entity_id", ["507f1f77bcf86cd799439011", "not-an-object-id"])
    async def test_get_unknown_id_is_not_found(self, recipes, entity_id):
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.get_by_id(entity_id)

        assert exc_info.value.reason is RepositoryErrorReason.NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_by_key(self, recipes):
        created = await recipes.create(recipe_data("Muffin"))

        assert await recipes.get_by_key("Muffin") == created
        assert await recipes.get_by_key("Scone") is None


class TestUpdateOrReplace:
    """Tests for update_or_replace."""

    @pytest.mark.asyncio
    async def test_merge_keeps_unmentioned_fields(self, recipes):
        """Merging should change only the fields in the payload."""
        created = await recipes.create(recipe_data("Muffin", image_url="http://img.test/m.png"))

        updated = await recipes.update_or_replace(created, {"servings": "12"})

        assert updated.id == created.id
        assert updated.servings == "12"
        assert updated.image_url == "http://img.test/m.png"
        assert await recipes.get_by_id(created.id) == updated

    @pytest.mark.asyncio
    async def test_replace_drops_unmentioned_optional_fields(self, recipes):
        """Replacing should keep only the payload fields plus the id."""
        created = await recipes.create(recipe_data("Muffin", image_url="http://img.test/m.png"))

        replaced = await recipes.update_or_replace(created, recipe_data("Blueberry Muffin"), replace=True)

        assert replaced.id == created.id
        assert replaced.title == "Blueberry Muffin"
        assert replaced.image_url is None

    @pytest.mark.asyncio
    async def test_replace_with_incomplete_payload_is_invalid(self, recipes):
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        created = await recipes.create(recipe_data("Muffin"))

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.update_or_replace(created, {"title": "Only a title"}, replace=True)

        assert exc_info.value.reason is RepositoryErrorReason.INVALID

    @pytest.mark.asyncio
    async def test_update_cannot_change_id(self, recipes):
        created = await recipes.create(recipe_data("Muffin"))

        updated = await recipes.update_or_replace(created, {"id": "507f1f77bcf86cd799439011", "servings": "3"})

        assert updated.id == created.id

    @pytest.mark.asyncio
    async def test_update_to_taken_title_is_duplicate(self, recipes):
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        await recipes.create(recipe_data("Muffin"))
        scone = await recipes.create(recipe_data("Scone"))

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.update_or_replace(scone, {"title": "Muffin"})

        assert exc_info.value.reason is RepositoryErrorReason.DUPLICATE_KEY


class TestDelete:
    """Tests for delete."""

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, recipes):
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        created = await recipes.create(recipe_data("Muffin"))
        await recipes.delete(created)

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.get_by_id(created.id)

        assert exc_info.value.reason is RepositoryErrorReason.NOT_FOUND

    @pytest.mark.asyncio
    async def test_delete_twice_is_not_found(self, recipes):
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        created = await recipes.create(recipe_data("Muffin"))
        await recipes.delete(created)

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.delete(created)

        assert exc_info.value.reason is RepositoryErrorReason.NOT_FOUND


# =============================================================================
# Query and Search
# =============================================================================

class TestQuery:
    """Tests for paginated query."""

    @pytest.mark.asyncio
    async def test_pages_partition_collection(self, recipes):
        """Pages should be disjoint, in insertion order, with correct metadata."""
        for i in range(5):
            await recipes.create(recipe_data(f"Recipe {i}"))

        first = await recipes.query(page=1, per_page=2)
        last = await recipes.query(page=3, per_page=2)

        assert [r.title for r in first.data] == ["Recipe 0", "Recipe 1"]
        assert [r.title for r in last.data] == ["Recipe 4"]
        assert first.pagination.total_count == 5
        assert first.pagination.total_pages == 3

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, recipes):
        await recipes.create(recipe_data("Muffin"))

        page = await recipes.query(page=4, per_page=10)

        assert page.data == []
        assert page.pagination.total_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0), (-1, 5)])
    async def test_non_positive_paging_is_invalid(self, recipes, page, per_page):
        from recipe_api.errors import RepositoryError, RepositoryErrorReason

        with pytest.raises(RepositoryError) as exc_info:
            await recipes.query(page=page, per_page=per_page)

        assert exc_info.value.reason is RepositoryErrorReason.INVALID


class TestSearchTerm:
    """Tests for search_term."""

    @pytest.mark.asyncio
    async def test_matches_title_or_category_ignoring_case(self, recipes):
        await recipes.create(recipe_data("Blueberry Muffin", category="Dessert"))
        await recipes.create(recipe_data("Fish Soup", category="Soup"))
        await recipes.create(recipe_data("Lasagna", category="Pasta"))

        by_title = await recipes.search_term("muffin")
        by_category = await recipes.search_term("SOUP")

        assert [r.title for r in by_title] == ["Blueberry Muffin"]
        assert [r.title for r in by_category] == ["Fish Soup"]

    @pytest.mark.asyncio
    async def test_empty_pattern_matches_everything(self, recipes):
        """An empty pattern is a broad match, not an error."""
        await recipes.create(recipe_data("Muffin"))
        await recipes.create(recipe_data("Scone"))

        assert len(await recipes.search_term("")) == 2

    @pytest.mark.asyncio
    async def test_pattern_is_matched_literally(self, recipes):
        await recipes.create(recipe_data("Muffin"))
        await recipes.create(recipe_data("Mac (and) cheese"))

        assert await recipes.search_term(".*") == []
        assert [r.title for r in await recipes.search_term("(and)")] == ["Mac (and) cheese"]

    @pytest.mark.asyncio
    async def test_no_match_is_empty_list(self, recipes):
        await recipes.create(recipe_data("Muffin"))

        assert await recipes.search_term("tofu") == []
