from __future__ import annotations

from typing import Optional
from pymongo.collection import Collection

from domain.models.user import User


class UserRepository:
    """CRUD operations for users collection."""

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def ensure_indexes(self) -> None:
        self.collection.create_index("username", unique=True)

    def create(self, user: User) -> str:
        result = self.collection.insert_one(user.to_mongo())
        return str(result.inserted_id)

    def get_by_username(self, username: str) -> Optional[User]:
        doc = self.collection.find_one({"username": username})
        return User.from_mongo(doc)

    def add_roles(self, username: str, roles: list[str]) -> int:
        result = self.collection.update_one(
            {"username": username}, {"$addToSet": {"roles": {"$each": list(roles)}}}
        )
        return result.modified_count
