"""Typed JSON Patch operations over the visible Country fields."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, RootModel, field_validator, model_validator

from domain.models.country import Country


class PatchOp(StrEnum):
    add = "add"
    replace = "replace"
    remove = "remove"
    test = "test"


# JSON pointer -> key of the external representation
PATCHABLE_PATHS: Dict[str, str] = {
    "/entityid": "entityId",
    "/name": "name",
    "/isocode": "isoCode",
}


class PatchOperation(BaseModel):
    """One field-level change, e.g. ``{"op": "replace", "path": "/name", "value": "France"}``."""

    op: PatchOp
    # JSON pointer from the "path" key, normalized to the API field name
    field: str = Field(..., validation_alias="path")
    value: Optional[str] = None

    @field_validator("op", mode="before")
    @classmethod
    def _normalize_op(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("field", mode="before")
    @classmethod
    def _normalize_path(cls, v: Any) -> str:
        if not isinstance(v, str):
            raise ValueError("path must be a JSON pointer string")
        key = PATCHABLE_PATHS.get(v.strip().lower())
        if key is None:
            raise ValueError(
                f"path '{v}' is not patchable; use one of /entityId, /name, /isoCode"
            )
        return key

    @model_validator(mode="after")
    def _value_required(self) -> "PatchOperation":
        if self.op is not PatchOp.remove and self.value is None:
            raise ValueError(f"'{self.op.value}' operation requires a value")
        return self


class CountryPatch(RootModel[List[PatchOperation]]):
    """Ordered list of operations applied to a full snapshot of a Country."""

    def apply_to(self, country: Country) -> Tuple[Dict[str, Any], Dict[str, List[str]]]:
        """
        Apply every operation to a snapshot of ``country``.

        Returns the patched snapshot (external field names) and the failures
        of ``test`` operations keyed by field. ``country`` itself is untouched.
        """
        snapshot = country.to_api()
        failures: Dict[str, List[str]] = {}

        for operation in self.root:
            field = operation.field
            if operation.op is PatchOp.test:
                if snapshot.get(field) != operation.value:
                    failures.setdefault(field, []).append(
                        f"Current value '{snapshot.get(field)}' does not match "
                        f"tested value '{operation.value}'"
                    )
            elif operation.op is PatchOp.remove:
                snapshot[field] = ""
            else:
                snapshot[field] = operation.value

        return snapshot, failures
