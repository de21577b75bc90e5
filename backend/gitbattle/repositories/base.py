"""Generic MongoDB repository."""

from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database

from gitbattle.entities.base import BaseEntity

T = TypeVar("T", bound=BaseEntity)

SortSpec = Sequence[Tuple[str, int]]


class BaseRepository(Generic[T]):
    """Thin typed wrapper around a pymongo collection."""

    def __init__(self, db: Database, collection_name: str, model_class: Type[T]):
        self.db = db
        self.collection: Collection = db[collection_name]
        self.model_class = model_class

    def _to_entity(self, doc: Optional[Dict[str, Any]]) -> Optional[T]:
        if doc is None:
            return None
        return self.model_class.model_validate(doc)

    def find_by_id(self, entity_id: str) -> Optional[T]:
        return self.find_one({"_id": entity_id})

    def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        return self._to_entity(self.collection.find_one(query))

    def find_many(
        self,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[T]:
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [self.model_class.model_validate(doc) for doc in cursor]

    def insert_one(self, entity: T) -> T:
        result = self.collection.insert_one(entity.to_mongo())
        if entity.id is None:
            entity.id = str(result.inserted_id)
        return entity

    def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        upsert: bool = False,
    ) -> Optional[T]:
        doc = self.collection.find_one_and_update(
            query,
            update,
            upsert=upsert,
            return_document=ReturnDocument.AFTER,
        )
        return self._to_entity(doc)

    def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        return self.collection.count_documents(query or {})

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return list(self.collection.aggregate(pipeline))
