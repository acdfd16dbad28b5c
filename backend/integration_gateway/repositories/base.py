"""
Read-side repository base.

Wraps one motor collection and turns its camelCase documents into pydantic
models. The template store is read-only for this service, so only lookups
are offered here.
"""

from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

Query = Dict[str, Any]
Projection = Optional[Dict[str, int]]


class BaseRepository(Generic[ModelT]):
    """
    Lookups over ``collection_name`` returning ``model_class`` instances.

    Subclasses set both class attributes, e.g.::

        class TemplateRepository(BaseRepository[IntegrationTemplate]):
            collection_name = TEMPLATES_COLLECTION
            model_class = IntegrationTemplate
    """

    collection_name: str
    model_class: Type[ModelT]

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[self.collection_name]

    def _parse(self, doc: Optional[Mapping[str, Any]]) -> Optional[ModelT]:
        # model_validate so _id and camelCase aliases are honored
        if doc is None:
            return None
        return self.model_class.model_validate(doc)

    def _parse_all(self, docs: List[Mapping[str, Any]]) -> List[ModelT]:
        return [self.model_class.model_validate(doc) for doc in docs]

    async def find_one(self, query: Query, projection: Projection = None) -> Optional[ModelT]:
        doc = await self.collection.find_one(query, projection)
        return self._parse(doc)

    async def find_many(
        self,
        query: Query,
        skip: int = 0,
        limit: int = 100,
        sort_by: Optional[str] = None,
        sort_order: int = 1,
        projection: Projection = None,
    ) -> List[ModelT]:
        """Run ``query`` with optional sort, then skip and limit."""
        cursor = self.collection.find(query, projection)
        if sort_by:
            cursor = cursor.sort(sort_by, sort_order)
        docs = await cursor.skip(skip).limit(limit).to_list(limit)
        return self._parse_all(docs)

    async def distinct(self, key: str, query: Optional[Query] = None) -> List[Any]:
        return await self.collection.distinct(key, query or {})
