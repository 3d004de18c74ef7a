from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple
from pymongo.collection import Collection
from pymongo import ASCENDING

from domain.models.country import Country


class CountryRepository:
    """Repository for Country model with CRUD operations."""

    def __init__(self, collection: Collection):
        self.collection: Collection = collection

    def ensure_indexes(self):
        """Create lookup/sort indexes (entityId uniqueness is checked by the service)."""
        self.collection.create_index([("entityId", ASCENDING)])
        self.collection.create_index([("name", ASCENDING)])

    def find_by_entity_id(self, entity_id: str) -> Optional[Country]:
        """Find a country by its business key."""
        doc = self.collection.find_one({"entityId": entity_id})
        return Country.from_mongo(doc) if doc else None

    def exists(self, entity_id: str) -> bool:
        return self.collection.find_one({"entityId": entity_id}, {"_id": 1}) is not None

    def find_all(self) -> List[Country]:
        """Find all countries sorted by name."""
        cursor = self.collection.find().sort("name", ASCENDING)
        return [Country.from_mongo(doc) for doc in cursor]

    def find_matching(
        self,
        query: Dict[str, str],
        sort: Sequence[Tuple[str, int]] = (),
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Country]:
        """Filter, then sort, then skip/limit."""
        cursor = self.collection.find(dict(query))
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit is not None:
            cursor = cursor.limit(limit)
        return [Country.from_mongo(doc) for doc in cursor]

    def count(self, query: Optional[Dict[str, str]] = None) -> int:
        return self.collection.count_documents(dict(query or {}))

    def save(self, country: Country) -> str:
        """Insert a country and return its storage identifier."""
        result = self.collection.insert_one(country.to_mongo())
        return str(result.inserted_id)

    def replace(self, entity_id: str, country: Country) -> int:
        """Replace the whole document for ``entity_id``; return the matched count."""
        result = self.collection.replace_one({"entityId": entity_id}, country.to_mongo())
        return result.matched_count

    def delete(self, entity_id: str) -> int:
        """Delete a country by its business key."""
        result = self.collection.delete_one({"entityId": entity_id})
        return result.deleted_count
