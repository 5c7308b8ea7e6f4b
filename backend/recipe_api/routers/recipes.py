"""
Recipes router for recipe CRUD, listing and search.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from recipe_api.core.pagination import build_page_links, pagination_headers
from recipe_api.dependencies.roles import require_admin, require_any_authenticated
from recipe_api.dependencies.services import get_recipe_service, get_services
from recipe_api.errors import NotFoundError, ValidationError
from recipe_api.models.principal import Principal
from recipe_api.models.recipe import Recipe
from recipe_api.schemas.recipe import (
    RecipeCreate,
    RecipeCreatedResponse,
    RecipeResponse,
    RecipeSearchRequest,
    RecipeUpdate,
)
from recipe_api.services.recipe_service import RecipeService

router = APIRouter(tags=["Recipes"])


def _to_response(request: Request, recipe: Recipe) -> RecipeResponse:
    self_url = str(request.url_for("get_recipe", recipe_id=recipe.id))
    return RecipeResponse.from_recipe(recipe, self_url)


async def load_recipe(
    recipe_id: str,
    recipes: RecipeService = Depends(get_recipe_service),
) -> Recipe:
    """Dependency loading the recipe addressed by the path."""
    return await recipes.entities.get_by_id(recipe_id)


# ==================== Recipe CRUD ====================


@router.post(
    "/recipe",
    response_model=RecipeCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create recipe",
)
async def create_recipe(
    request: Request,
    body: RecipeCreate,
    principal: Principal = Depends(require_admin()),
    recipes: RecipeService = Depends(get_recipe_service),
):
    """
    Create a recipe and notify the admin's registered webhook.

    The recipe is stored even if the webhook cannot be delivered; the
    `webhook` field of the response reports the delivery outcome.
    """
    creation = await recipes.create(body.model_dump(), principal)
    response = _to_response(request, creation.recipe)
    return RecipeCreatedResponse(**response.model_dump(), webhook=creation.webhook)


@router.get(
    "/recipe/{recipe_id}",
    response_model=RecipeResponse,
    summary="Get recipe",
)
async def get_recipe(
    request: Request,
    principal: Principal = Depends(require_any_authenticated()),
    recipe: Recipe = Depends(load_recipe),
):
    """Get a single recipe with its self link."""
    return _to_response(request, recipe)


@router.put(
    "/recipe/{recipe_id}",
    response_model=RecipeResponse,
    summary="Replace recipe",
)
async def replace_recipe(
    request: Request,
    principal: Principal = Depends(require_admin()),
    recipe: Recipe = Depends(load_recipe),
    body: RecipeCreate = Body(...),
    recipes: RecipeService = Depends(get_recipe_service),
):
    """Replace every field of a recipe. The id and owner are kept."""
    payload = {**body.model_dump(), "owner_id": recipe.owner_id}
    replaced = await recipes.entities.update_or_replace(recipe, payload, replace=True)
    return _to_response(request, replaced)


@router.patch(
    "/recipe/{recipe_id}",
    response_model=RecipeResponse,
    summary="Update recipe",
)
async def update_recipe(
    request: Request,
    principal: Principal = Depends(require_admin()),
    recipe: Recipe = Depends(load_recipe),
    body: RecipeUpdate = Body(...),
    recipes: RecipeService = Depends(get_recipe_service),
):
    """Update only the fields sent in the body."""
    changes = body.model_dump(exclude_unset=True)
    if not changes:
        raise ValidationError("Request body cannot be empty.")

    updated = await recipes.entities.update_or_replace(recipe, changes, replace=False)
    return _to_response(request, updated)


@router.delete(
    "/recipe/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete recipe",
)
async def delete_recipe(
    principal: Principal = Depends(require_admin()),
    recipe: Recipe = Depends(load_recipe),
    recipes: RecipeService = Depends(get_recipe_service),
):
    """
    Delete a recipe.

    **Warning**: This action cannot be undone.
    """
    await recipes.entities.delete(recipe)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ==================== Listing and Search ====================


@router.get(
    "/recipes",
    response_model=list[RecipeResponse],
    summary="List recipes",
)
async def list_recipes(
    request: Request,
    principal: Principal = Depends(require_any_authenticated()),
    page: int = Query(1, ge=1, description="Page number"),
    per_page: Optional[int] = Query(None, ge=1, le=100, description="Items per page"),
    recipes: RecipeService = Depends(get_recipe_service),
):
    """
    List recipes page by page.

    Pagination is described by the `X-Total-Count`, `X-Page`, `X-Per-Page`,
    `X-Total-Pages` and `Link` headers. An empty page answers 204.
    """
    if per_page is None:
        per_page = get_services(request).settings.default_per_page

    result = await recipes.entities.get(page, per_page)
    links = build_page_links(str(request.url_for("list_recipes")), result.pagination)
    headers = pagination_headers(result.pagination, links)

    if not result.data:
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)

    content = [_to_response(request, recipe).model_dump() for recipe in result.data]
    return JSONResponse(content=content, headers=headers)


@router.post(
    "/recipes/{search}",
    response_model=list[RecipeResponse],
    summary="Search recipes",
)
async def search_recipes(
    request: Request,
    search: str,
    principal: Principal = Depends(require_any_authenticated()),
    body: Optional[RecipeSearchRequest] = Body(None),
    recipes: RecipeService = Depends(get_recipe_service),
):
    """
    Search recipes whose title or category contains the term (any case).

    The term is the `searchTerm` body field if sent, else the path segment.
    """
    term = body.search_term if body is not None and body.search_term is not None else search
    if not term.strip():
        raise ValidationError("Search term not provided.")

    found = await recipes.search_term(term.strip())
    if not found:
        raise NotFoundError("No recipes found matching the search term.")

    return [_to_response(request, recipe) for recipe in found]
