"""
Recipe request/response schemas.
"""
from typing import Optional

from pydantic import BaseModel, Field

from recipe_api.models.recipe import DEFAULT_CATEGORY, Recipe


class RecipeCreate(BaseModel):
    """Create (or fully replace) recipe request."""
    title: str = Field(..., min_length=1, description="Recipe title")
    ingredients: list[str] = Field(..., min_length=1, description="Ordered ingredients")
    servings: str = Field(..., min_length=1, description="Number of servings")
    instructions: list[str] = Field(..., min_length=1, description="Ordered steps")
    category: str = Field(default=DEFAULT_CATEGORY, description="Recipe category")
    image_url: Optional[str] = Field(None, description="Optional picture")


class RecipeUpdate(BaseModel):
    """Partial recipe update. Only fields sent are applied."""
    title: Optional[str] = Field(None, min_length=1)
    ingredients: Optional[list[str]] = Field(None, min_length=1)
    servings: Optional[str] = Field(None, min_length=1)
    instructions: Optional[list[str]] = Field(None, min_length=1)
    category: Optional[str] = None
    image_url: Optional[str] = None


class RecipeSearchRequest(BaseModel):
    """Optional search body; overrides the path segment when present."""
    search_term: Optional[str] = Field(None, alias="searchTerm")

    class Config:
        populate_by_name = True


class ResourceLinks(BaseModel):
    """Hypermedia links of a single resource."""
    self: str


class RecipeResponse(BaseModel):
    """Recipe with its self link."""
    id: str
    title: str
    ingredients: list[str]
    servings: str
    instructions: list[str]
    category: str
    owner_id: Optional[str] = None
    image_url: Optional[str] = None
    links: ResourceLinks

    @classmethod
    def from_recipe(cls, recipe: Recipe, self_url: str) -> "RecipeResponse":
        return cls(
            **recipe.model_dump(exclude={"id"}),
            id=recipe.id,
            links=ResourceLinks(self=self_url),
        )


class WebhookDelivery(BaseModel):
    """Outcome of the webhook sent on recipe creation."""
    delivered: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class RecipeCreatedResponse(RecipeResponse):
    """Created recipe plus the webhook delivery outcome."""
    webhook: WebhookDelivery
