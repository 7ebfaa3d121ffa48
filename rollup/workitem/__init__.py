"""
WorkItem Abstraction Package

Provider-agnostic access to the work items the rollup reads and writes.
Azure DevOps Boards is the supported backend.
"""

from rollup.workitem.types import (
    Credential,
    CredentialSources,
    FieldLookup,
    PatchOp,
    PatchOperation,
    RollupResult,
    UpsertResult,
    build_patch_document,
)
from rollup.workitem.errors import (
    ConfigurationError,
    MalformedResponseError,
    RemoteCallError,
    RollupError,
)
from rollup.workitem.protocol import WorkItemProvider
from rollup.workitem.config import RollupSettings, build_settings, load_rollup_config
from rollup.workitem.credentials import resolve_credential
from rollup.workitem.client import WorkItemClient

__all__ = [
    "ConfigurationError",
    "Credential",
    "CredentialSources",
    "FieldLookup",
    "MalformedResponseError",
    "PatchOp",
    "PatchOperation",
    "RemoteCallError",
    "RollupError",
    "RollupResult",
    "RollupSettings",
    "UpsertResult",
    "WorkItemClient",
    "WorkItemProvider",
    "build_patch_document",
    "build_settings",
    "load_rollup_config",
    "resolve_credential",
]
