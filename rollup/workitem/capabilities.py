"""
WorkItem provider capabilities.

Capability detection for determining what operations a provider supports.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rollup.workitem.protocol import WorkItemProvider


class Capability(Enum):
    """
    Capabilities that a WorkItem provider may support.

    A read-only provider can still compute a total for a dry run.
    """
    QUERY = "query"                  # run_query
    READ_FIELDS = "read_fields"      # get_fields_batch, get_work_item
    WRITE_FIELDS = "write_fields"    # patch_work_item


# Method names for each capability
CAPABILITY_METHODS = {
    Capability.QUERY: ["run_query"],
    Capability.READ_FIELDS: ["get_fields_batch", "get_work_item"],
    Capability.WRITE_FIELDS: ["patch_work_item"],
}


def detect_capabilities(provider: "WorkItemProvider") -> set[Capability]:
    """
    Detect which capabilities a provider supports.

    Checks for the existence of required methods on the provider.

    Args:
        provider: WorkItem provider instance

    Returns:
        Set of supported Capability values
    """
    capabilities = set()

    for capability, methods in CAPABILITY_METHODS.items():
        has_all = all(
            callable(getattr(provider, method, None))
            for method in methods
        )
        if has_all:
            capabilities.add(capability)

    return capabilities


def has_capability(provider: "WorkItemProvider", capability: Capability) -> bool:
    """
    Check if a provider supports a specific capability.

    Args:
        provider: WorkItem provider instance
        capability: Capability to check

    Returns:
        True if provider supports the capability
    """
    return capability in detect_capabilities(provider)
