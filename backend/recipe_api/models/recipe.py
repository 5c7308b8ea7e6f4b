"""
Recipe model for the recipes collection.
"""
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_CATEGORY = "Uncategorized"


class Recipe(BaseModel):
    """
    Recipe document model for MongoDB recipes_db.recipes collection.
    """
    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    title: str = Field(..., min_length=1, description="Unique recipe title")
    ingredients: list[str] = Field(..., min_length=1, description="Ordered ingredients")
    servings: str = Field(..., min_length=1, description="Number of servings")
    instructions: list[str] = Field(..., min_length=1, description="Ordered steps")
    category: str = Field(default=DEFAULT_CATEGORY, description="Recipe category")
    owner_id: Optional[str] = Field(None, description="Id of the admin who created it")
    image_url: Optional[str] = Field(None, description="Optional picture")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True
