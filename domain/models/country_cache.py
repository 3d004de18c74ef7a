from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from domain.models.country import Country


class CountryCache(BaseModel):
    """
    Country as held by referential caches.

    It may not carry all the data of the complete ``Country`` model and never
    carries the storage identifier.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    entity_id: str = Field(default="", alias="entityId")
    name: str = ""
    iso_code: str = Field(default="", alias="isoCode")

    @classmethod
    def from_country(cls, country: Country) -> "CountryCache":
        return cls(
            entity_id=country.entity_id,
            name=country.name,
            iso_code=country.iso_code,
        )

    def to_country(self) -> Country:
        # Cached snapshots were valid when stored; skip re-validation.
        return Country.model_construct(
            entity_id=self.entity_id,
            name=self.name,
            iso_code=self.iso_code,
        )
