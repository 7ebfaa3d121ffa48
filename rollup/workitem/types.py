"""
WorkItem types and data structures.

This module defines the transient values passed between rollup stages:
credentials, field lookups, patch operations and stage results. None of
them outlive a single run.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


PIPELINE_TOKEN_ENV = "SYSTEM_ACCESSTOKEN"
PERSONAL_TOKEN_ENV = "AZURE_DEVOPS_PAT"


class PatchOp(Enum):
    """JSON Patch operations used when writing a field."""
    ADD = "add"
    REPLACE = "replace"


@dataclass(frozen=True)
class CredentialSources:
    """
    Raw token values a credential may be resolved from.

    Built once at startup and passed explicitly to the resolver, so
    nothing downstream reads the process environment.

    Attributes:
        access_token: Pipeline-provided OAuth token (preferred)
        personal_access_token: Azure DevOps personal access token
    """
    access_token: str | None = field(default=None, repr=False)
    personal_access_token: str | None = field(default=None, repr=False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CredentialSources":
        """Read both token variables from an environment mapping."""
        if environ is None:
            environ = os.environ
        return cls(
            access_token=environ.get(PIPELINE_TOKEN_ENV),
            personal_access_token=environ.get(PERSONAL_TOKEN_ENV),
        )


@dataclass(frozen=True)
class Credential:
    """
    Resolved authorization for REST calls.

    Attributes:
        header_value: Complete Authorization header value
        mode: Human-readable scheme label ("Bearer" or "PAT")
    """
    header_value: str = field(repr=False)
    mode: str

    def __str__(self) -> str:
        return self.mode


@dataclass(frozen=True)
class FieldLookup:
    """
    Result of looking up a field reference on a work item.

    `present` is True when the key exists, even if its value is null.
    """
    present: bool
    value: Any = None

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any] | None, field_ref: str) -> "FieldLookup":
        """Look up field_ref in a work item's fields mapping."""
        if not isinstance(fields, Mapping) or field_ref not in fields:
            return cls(present=False)
        return cls(present=True, value=fields[field_ref])


@dataclass(frozen=True)
class PatchOperation:
    """A single JSON Patch operation against a work item."""
    op: PatchOp
    path: str
    value: Any

    @classmethod
    def for_field(cls, op: PatchOp, field_ref: str, value: Any) -> "PatchOperation":
        return cls(op=op, path=f"/fields/{field_ref}", value=value)

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op.value, "path": self.path, "value": self.value}


def build_patch_document(operation: PatchOperation) -> list[dict[str, Any]]:
    """
    Wrap one operation in the list container the patch endpoint expects.

    The endpoint rejects a bare object, even for a single operation.
    """
    return [operation.to_dict()]


@dataclass
class UpsertResult:
    """
    Outcome of writing the rollup total to the target work item.

    Attributes:
        item_id: ID returned by the update call
        field_ref: Field reference that was written
        value: Value that was sent
        operation: Whether the field was added or replaced
        confirmed: True if the response echoed the value back
    """
    item_id: int
    field_ref: str
    value: float
    operation: PatchOp
    confirmed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "field_ref": self.field_ref,
            "value": self.value,
            "operation": self.operation.value,
            "confirmed": self.confirmed,
        }


@dataclass
class RollupResult:
    """
    Result of a complete rollup run.

    `upsert` is None for a dry run, in which case `planned` holds the
    operation that would have been sent.
    """
    item_ids: list[int]
    total: float
    upsert: UpsertResult | None = None
    planned: PatchOperation | None = None

    @property
    def item_count(self) -> int:
        return len(self.item_ids)

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_ids": list(self.item_ids),
            "total": self.total,
            "upsert": self.upsert.to_dict() if self.upsert else None,
            "planned": self.planned.to_dict() if self.planned else None,
        }
