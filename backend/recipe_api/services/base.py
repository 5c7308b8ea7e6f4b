"""
Generic entity service.

A thin pass-through over a repository. Every failure is re-raised through
``handle_error`` with a caller-facing message and the original error kept
as the cause.
"""
from typing import Generic, TypeVar, Union

from pydantic import BaseModel

from recipe_api.errors import handle_error
from recipe_api.repositories.base import MongoRepository, Page

T = TypeVar("T", bound=BaseModel)


class EntityService(Generic[T]):
    """CRUD, query and search for one entity type."""

    def __init__(self, repository: MongoRepository[T], name: str):
        self.repository = repository
        self.name = name

    async def insert(self, payload: Union[dict, T]) -> T:
        try:
            return await self.repository.create(payload)
        except Exception as error:
            raise handle_error(error, f"Failed to create {self.name}.") from error

    async def get_by_id(self, entity_id: str) -> T:
        try:
            return await self.repository.get_by_id(entity_id)
        except Exception as error:
            raise handle_error(error, f"The requested {self.name} was not found.") from error

    async def get(self, page: int = 1, per_page: int = 20) -> Page[T]:
        try:
            return await self.repository.query(page, per_page)
        except Exception as error:
            raise handle_error(error, f"Failed to get {self.name} documents.") from error

    async def update_or_replace(self, existing: T, payload: dict, replace: bool = False) -> T:
        try:
            return await self.repository.update_or_replace(existing, payload, replace)
        except Exception as error:
            action = "replace" if replace else "update"
            raise handle_error(error, f"Failed to {action} {self.name}.") from error

    async def delete(self, existing: T) -> None:
        try:
            await self.repository.delete(existing)
        except Exception as error:
            raise handle_error(error, f"Failed to delete {self.name}.") from error

    async def search_term(self, pattern: str) -> list[T]:
        try:
            return await self.repository.search_term(pattern)
        except Exception as error:
            raise handle_error(error, "Failed to search for term.") from error
