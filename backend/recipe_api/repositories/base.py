"""
Generic MongoDB repository.

One ``MongoRepository`` is instantiated per entity type. It knows the
pydantic model, the collection, the natural key and the fields used for
text search, and translates every store failure into ``RepositoryError``.
"""
import logging
import re
from typing import Any, Generic, Optional, TypeVar, Union

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel, Field
from pydantic import ValidationError as ModelValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError

from recipe_api.core.pagination import Pagination, calculate_pagination
from recipe_api.errors import RepositoryError, RepositoryErrorReason

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Page(BaseModel, Generic[T]):
    """One page of a paginated query."""
    data: list[T] = Field(default=[])
    pagination: Pagination


def _is_duplicate_key(error: PyMongoError) -> bool:
    return isinstance(error, DuplicateKeyError) or getattr(error, "code", None) == 11000


class MongoRepository(Generic[T]):
    """Entity-agnostic CRUD, paginated query and search over one collection."""

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        model: type[T],
        natural_key: str,
        search_fields: tuple[str, ...] = (),
    ):
        self.collection = collection
        self.model = model
        self.natural_key = natural_key
        self.search_fields = search_fields

    # ==================== Conversion ====================

    def _to_entity(self, doc: dict) -> T:
        doc["_id"] = str(doc["_id"])
        return self.model.model_validate(doc)

    def _to_document(self, entity: T) -> dict:
        return entity.model_dump(exclude={"id"})

    def _validate(self, payload: dict) -> T:
        try:
            return self.model.model_validate(payload)
        except ModelValidationError as e:
            raise RepositoryError(
                f"Invalid {self.model.__name__} data.",
                cause=e,
                reason=RepositoryErrorReason.INVALID,
            ) from e

    def _store_error(self, error: Exception, message: str) -> RepositoryError:
        if isinstance(error, PyMongoError) and _is_duplicate_key(error):
            reason = RepositoryErrorReason.DUPLICATE_KEY
        else:
            reason = RepositoryErrorReason.STORE_FAILURE
            logger.error("%s: %s", message, error)
        return RepositoryError(message, cause=error, reason=reason)

    def _not_found(self, entity_id: Any, cause: Optional[Exception] = None) -> RepositoryError:
        return RepositoryError(
            f"{self.model.__name__} with id {entity_id} not found.",
            cause=cause,
            reason=RepositoryErrorReason.NOT_FOUND,
        )

    def _object_id(self, entity_id: Any) -> ObjectId:
        try:
            return ObjectId(entity_id)
        except (InvalidId, TypeError) as e:
            raise self._not_found(entity_id, cause=e) from e

    # ==================== CRUD ====================

    async def create(self, payload: Union[dict, T]) -> T:
        """
        Insert a new document.

        Args:
            payload: Field values (or an unsaved entity)

        Returns:
            The stored entity with its assigned id

        Raises:
            RepositoryError: DUPLICATE_KEY, INVALID or STORE_FAILURE
        """
        data = payload.model_dump(exclude={"id"}) if isinstance(payload, BaseModel) else dict(payload)
        data.pop("id", None)
        data.pop("_id", None)
        entity = self._validate(data)
        doc = self._to_document(entity)

        try:
            result = await self.collection.insert_one(doc)
        except PyMongoError as e:
            raise self._store_error(e, f"Failed to create {self.model.__name__}.") from e

        return entity.model_copy(update={"id": str(result.inserted_id)})

    async def get_by_id(self, entity_id: str) -> T:
        """
        Get a document by id.

        Raises:
            RepositoryError: NOT_FOUND if the id is unknown or not an ObjectId
        """
        object_id = self._object_id(entity_id)
        try:
            doc = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            raise self._store_error(e, f"Failed to get {self.model.__name__}.") from e

        if not doc:
            raise self._not_found(entity_id)
        return self._to_entity(doc)

    async def get_by_key(self, value: str) -> Optional[T]:
        """Get a document by its natural key, or None."""
        try:
            doc = await self.collection.find_one({self.natural_key: value})
        except PyMongoError as e:
            raise self._store_error(e, f"Failed to get {self.model.__name__}.") from e

        return self._to_entity(doc) if doc else None

    async def query(self, page: int = 1, per_page: int = 20) -> Page[T]:
        """
        Get one page of documents in insertion order.

        A page past the end yields empty data, not an error.

        Raises:
            RepositoryError: INVALID if page or per_page is below 1
        """
        if page < 1 or per_page < 1:
            raise RepositoryError(
                "Page and per_page must be positive.",
                reason=RepositoryErrorReason.INVALID,
            )

        skip = (page - 1) * per_page
        try:
            total = await self.collection.count_documents({})
            cursor = self.collection.find({}).sort("_id", 1).skip(skip).limit(per_page)
            docs = await cursor.to_list(length=per_page)
        except PyMongoError as e:
            raise self._store_error(e, f"Failed to query {self.model.__name__}.") from e

        return Page[self.model](
            data=[self._to_entity(doc) for doc in docs],
            pagination=calculate_pagination(total, page, per_page),
        )

    async def update_or_replace(self, existing: T, payload: dict, replace: bool = False) -> T:
        """
        Update an entity.

        Args:
            existing: The stored entity
            payload: New field values
            replace: False merges payload into existing, True overwrites
                every mutable field; the id is kept in both cases

        Returns:
            The updated entity

        Raises:
            RepositoryError: INVALID, DUPLICATE_KEY, NOT_FOUND or STORE_FAILURE
        """
        changes = {k: v for k, v in payload.items() if k not in ("id", "_id")}
        if replace:
            data = changes
        else:
            data = {**existing.model_dump(exclude={"id"}), **changes}

        entity = self._validate(data).model_copy(update={"id": existing.id})
        object_id = self._object_id(existing.id)

        try:
            result = await self.collection.replace_one({"_id": object_id}, self._to_document(entity))
        except PyMongoError as e:
            raise self._store_error(e, f"Failed to update {self.model.__name__}.") from e

        if result.matched_count == 0:
            raise self._not_found(existing.id)
        return entity

    async def delete(self, existing: T) -> None:
        """
        Delete an entity.

        Raises:
            RepositoryError: NOT_FOUND if it was already deleted
        """
        object_id = self._object_id(existing.id)
        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            raise self._store_error(e, f"Failed to delete {self.model.__name__}.") from e

        if result.deleted_count == 0:
            raise self._not_found(existing.id)

    # ==================== Search ====================

    async def search_term(self, pattern: str) -> list[T]:
        """
        Case-insensitive partial match against the search fields.

        The pattern is matched literally. An empty pattern matches every
        document.
        """
        regex = re.escape(pattern or "")
        query: dict = {}
        if self.search_fields:
            query = {"$or": [{field: {"$regex": regex, "$options": "i"}} for field in self.search_fields]}

        try:
            docs = await self.collection.find(query).sort("_id", 1).to_list(length=None)
        except PyMongoError as e:
            raise self._store_error(e, f"Failed to search {self.model.__name__}.") from e

        return [self._to_entity(doc) for doc in docs]
