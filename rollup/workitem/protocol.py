"""
WorkItem Provider Protocol.

Defines the interface a work item backend must implement for the rollup.
Uses Python's Protocol for structural typing - providers don't need
to explicitly inherit from this class.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class WorkItemProvider(Protocol):
    """
    Backend interface used by the rollup stages.

    Implementations include:
    - AzureDevOpsWorkItemProvider (REST API)
    - Mock providers in tests

    Methods return decoded JSON payloads; interpreting them is left to
    the stage that asked.
    """

    @property
    def name(self) -> str:
        """
        Provider identifier.

        Returns:
            Provider name (e.g., "azure_devops")
        """
        ...

    # --- Read Operations ---

    def run_query(self, query: str) -> dict[str, Any]:
        """
        Execute a WIQL query.

        Args:
            query: WIQL text

        Returns:
            Query response (matching items under "workItems")
        """
        ...

    def get_fields_batch(self, item_ids: list[int], field_refs: list[str]) -> dict[str, Any]:
        """
        Fetch the given fields for many work items in one call.

        Args:
            item_ids: Work item IDs
            field_refs: Field reference names to return

        Returns:
            Batch response (items under "value")
        """
        ...

    def get_work_item(self, item_id: int, field_refs: list[str]) -> dict[str, Any]:
        """
        Fetch a single work item restricted to the given fields.

        Args:
            item_id: Work item ID
            field_refs: Field reference names to return

        Returns:
            Work item payload
        """
        ...

    # --- Write Operations ---

    def patch_work_item(self, item_id: int, document: list[dict[str, Any]]) -> dict[str, Any]:
        """
        Apply a JSON Patch document to a work item.

        Args:
            item_id: Work item ID
            document: List of patch operations

        Returns:
            Updated work item payload
        """
        ...
