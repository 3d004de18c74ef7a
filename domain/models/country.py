from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

REQUIRED_MESSAGES = {
    "entity_id": "The country business identifier is required",
    "name": "The country name is required",
    "iso_code": "The ISO code is required",
}

# Keys a client may never set; the storage identifier belongs to MongoDB.
_STORAGE_KEYS = ("_id", "technicalId", "technical_id")


class Country(BaseModel):
    """
    Country entity.

    - technical_id: MongoDB ``_id``, never part of the API representation
    - entity_id: caller-assigned business key (e.g. "fr")
    - name: display name (e.g. "France")
    - iso_code: short code (e.g. "FR"), no uniqueness enforced
    """

    model_config = ConfigDict(populate_by_name=True)

    technical_id: Optional[str] = Field(default=None, alias="_id", exclude=True)
    entity_id: str = Field(..., alias="entityId", description="Business key")
    name: str = Field(..., description="Display name")
    iso_code: str = Field(..., alias="isoCode", description="Short ISO code")

    @field_validator("technical_id", mode="before")
    @classmethod
    def _stringify_object_id(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("entity_id", "name", "iso_code", mode="after")
    @classmethod
    def _required(cls, v: str, info: ValidationInfo) -> str:
        if not v.strip():
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return v

    # ----------------- Serialization helpers -----------------
    def to_mongo(self) -> dict:
        doc = self.model_dump(by_alias=True)
        if self.technical_id:
            doc["_id"] = ObjectId(self.technical_id)
        return doc

    def to_api(self) -> dict:
        """External representation: entityId, name, isoCode."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_mongo(cls, doc: dict | None) -> "Country | None":
        """Deserialize from MongoDB without re-running the API validators."""
        if not doc:
            return None
        technical_id = doc.get("_id")
        return cls.model_construct(
            technical_id=str(technical_id) if technical_id is not None else None,
            entity_id=doc.get("entityId", ""),
            name=doc.get("name", ""),
            iso_code=doc.get("isoCode", ""),
        )

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Country":
        """Build a country from a client payload, ignoring any storage id."""
        data = {k: v for k, v in payload.items() if k not in _STORAGE_KEYS}
        return cls.model_validate(data)


def validation_details(exc: PydanticValidationError) -> Dict[str, List[str]]:
    """Group pydantic error messages by offending field (API names)."""
    details: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "body"
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.setdefault(field, []).append(message)
    return details
