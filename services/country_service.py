"""Service layer for country CRUD, querying and the cached listing."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError

from domain.models.country import Country, validation_details
from domain.models.country_cache import CountryCache
from domain.models.country_patch import CountryPatch
from middleware.errors import (
    DuplicateKeyError,
    PatchValidationError,
    RecordNotFoundError,
    RouteKeyMismatchError,
    ValidationError,
)
from repositories.country_repository import CountryRepository
from services.listing_cache import ListingCache
from utils.odata_query import CountryQuery

LISTING_CACHE_KEY = "CountriesList"
DEFAULT_LISTING_TTL_SECONDS = 600


class CountryService:
    """Country operations over an injected repository and listing cache."""

    def __init__(
        self,
        repo: CountryRepository,
        cache: ListingCache,
        *,
        listing_ttl_seconds: float = DEFAULT_LISTING_TTL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._repo = repo
        self._cache = cache
        self._ttl = listing_ttl_seconds
        self._log = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------ reads
    def list_countries(self) -> List[Country]:
        """Return every country sorted by name, served from the cache when possible."""
        self._log.info("Fetching the country list from the cache.")
        cached = self._cache.get(LISTING_CACHE_KEY)
        if cached is None:
            self._log.info("Cache empty. Fetching the country list from the database.")
            cached = tuple(CountryCache.from_country(c) for c in self._repo.find_all())
            self._cache.set(LISTING_CACHE_KEY, cached, self._ttl)
        else:
            self._log.info("Country list served from the cache.")
        return [entry.to_country() for entry in cached]

    def query_countries(self, query: CountryQuery) -> List[Country]:
        """Filter, sort then paginate; never touches the listing cache."""
        if query.returns_nothing:
            return []
        return self._repo.find_matching(
            query.filter, query.sort, skip=query.skip, limit=query.top
        )

    def count_matching(self, query: CountryQuery) -> int:
        """Number of records matching the filter, before pagination."""
        return self._repo.count(query.filter)

    def get_country(self, entity_id: str) -> Country:
        country = self._repo.find_by_entity_id(entity_id)
        if country is None:
            raise RecordNotFoundError(f"Country with EntityId '{entity_id}' not found.")
        return country

    def count_countries(self) -> int:
        return self._repo.count()

    # --------------------------------------------------------------- mutations
    def create_country(self, payload: Any) -> Country:
        """Insert a new country unless its entityId is already taken."""
        country = self._parse_body(payload)

        if self._repo.exists(country.entity_id):
            raise DuplicateKeyError(
                f"A country with EntityId '{country.entity_id}' already exists.",
                details={"entityId": country.entity_id},
            )

        country.technical_id = self._repo.save(country)
        self._invalidate_listing("create")
        self._log.info("Country '%s' created.", country.entity_id)
        return country

    def replace_country(self, entity_id: str, payload: Any) -> Country:
        """Replace every field of an existing country, keeping its storage id."""
        country = self._parse_body(payload)

        if entity_id != country.entity_id:
            raise RouteKeyMismatchError(
                "The route id does not match the country EntityId.",
                details={"route": entity_id, "entityId": country.entity_id},
            )

        existing = self.get_country(entity_id)
        country.technical_id = existing.technical_id

        if self._repo.replace(entity_id, country) == 0:
            raise RecordNotFoundError(f"Country with EntityId '{entity_id}' not found.")

        self._invalidate_listing("replace")
        self._log.info("Country '%s' replaced.", entity_id)
        return country

    def patch_country(self, entity_id: str, operations: Any) -> Country:
        """Apply a JSON Patch document, re-validate, then persist via full replace."""
        if operations is None:
            raise ValidationError("Patch document is null.")
        try:
            patch = CountryPatch.model_validate(operations)
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid patch document.", details=validation_details(exc)
            ) from exc

        existing = self.get_country(entity_id)
        snapshot, failures = patch.apply_to(existing)

        if snapshot.get("entityId") != existing.entity_id:
            failures.setdefault("entityId", []).append(
                "The country EntityId cannot be changed; delete and re-create the country instead"
            )

        try:
            patched = Country.from_api(snapshot)
        except PydanticValidationError as exc:
            for field, messages in validation_details(exc).items():
                failures.setdefault(field, []).extend(messages)
            patched = None

        if failures:
            raise PatchValidationError(details=failures)

        patched.technical_id = existing.technical_id
        if self._repo.replace(entity_id, patched) == 0:
            raise RecordNotFoundError(f"Country with EntityId '{entity_id}' not found.")

        self._invalidate_listing("patch")
        self._log.info("Country '%s' patched.", entity_id)
        return patched

    def delete_country(self, entity_id: str) -> None:
        if self._repo.delete(entity_id) == 0:
            raise RecordNotFoundError(f"Country with EntityId '{entity_id}' not found.")

        self._invalidate_listing("delete")
        self._log.info("Country '%s' deleted.", entity_id)

    # ---------------------------------------------------------------- helpers
    def _parse_body(self, payload: Any) -> Country:
        if payload is None:
            raise ValidationError("Country object is null.")
        if not isinstance(payload, dict):
            raise ValidationError("Country body must be a JSON object.")
        try:
            return Country.from_api(payload)
        except PydanticValidationError as exc:
            raise ValidationError(
                "Invalid country.", details=validation_details(exc)
            ) from exc

    def _invalidate_listing(self, reason: str) -> None:
        self._cache.remove(LISTING_CACHE_KEY)
        self._log.info("Country list cache invalidated (%s).", reason)
