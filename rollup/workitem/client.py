"""
WorkItem client facade.

Wraps a provider, checks its capabilities before use and gives the
rollup stages a small, typed API.
"""

from typing import TYPE_CHECKING, Any

from rollup.workitem.capabilities import Capability, detect_capabilities
from rollup.workitem.config import RollupSettings
from rollup.workitem.types import Credential, PatchOperation, build_patch_document

if TYPE_CHECKING:
    from rollup.workitem.protocol import WorkItemProvider


class WorkItemClient:
    """
    User-facing client for work item operations.

    Example:
        client = WorkItemClient.from_settings(settings, credential)
        response = client.run_query("SELECT [System.Id] FROM WorkItems")
    """

    def __init__(self, provider: "WorkItemProvider"):
        """
        Initialize client with a provider.

        Args:
            provider: WorkItem provider instance
        """
        self._provider = provider
        self._capabilities = detect_capabilities(provider)

    @classmethod
    def from_settings(cls, settings: RollupSettings, credential: Credential) -> "WorkItemClient":
        """Create a client for the Azure DevOps project named in settings."""
        from rollup.workitem.providers.azure_devops import AzureDevOpsWorkItemProvider
        from rollup.workitem.rest import RestClient

        provider = AzureDevOpsWorkItemProvider.from_settings(RestClient(credential), settings)
        return cls(provider)

    @property
    def provider_name(self) -> str:
        """Name of the underlying provider."""
        return self._provider.name

    @property
    def capabilities(self) -> set[Capability]:
        """Set of capabilities supported by the provider."""
        return self._capabilities

    def has_capability(self, capability: Capability) -> bool:
        """Check if provider supports a specific capability."""
        return capability in self._capabilities

    def _require(self, capability: Capability) -> None:
        if capability not in self._capabilities:
            raise NotImplementedError(
                f"Provider '{self.provider_name}' does not support {capability.value}"
            )

    # --- Read Operations ---

    def run_query(self, query: str) -> dict[str, Any]:
        self._require(Capability.QUERY)
        return self._provider.run_query(query)

    def get_fields_batch(self, item_ids: list[int], field_refs: list[str]) -> dict[str, Any]:
        self._require(Capability.READ_FIELDS)
        return self._provider.get_fields_batch(item_ids, field_refs)

    def get_work_item(self, item_id: int, field_refs: list[str]) -> dict[str, Any]:
        self._require(Capability.READ_FIELDS)
        return self._provider.get_work_item(item_id, field_refs)

    # --- Write Operations ---

    def apply_patch(self, item_id: int, operation: PatchOperation) -> dict[str, Any]:
        """
        Send a single operation as a one-element patch document.

        Args:
            item_id: Work item ID
            operation: Operation to apply

        Returns:
            Updated work item payload
        """
        self._require(Capability.WRITE_FIELDS)
        return self._provider.patch_work_item(item_id, build_patch_document(operation))
