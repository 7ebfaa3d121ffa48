"""
Azure DevOps WorkItem Provider.

Implements the WorkItemProvider protocol over the Boards REST API.
"""

from typing import Any
from urllib.parse import quote, urlencode

from rollup.workitem.config import DEFAULT_API_VERSION, RollupSettings
from rollup.workitem.rest import JSON_PATCH_CONTENT_TYPE, RestClient


class AzureDevOpsWorkItemProvider:
    """
    WorkItemProvider implementation for Azure DevOps.

    Builds project-scoped `_apis/wit` URLs and delegates transport
    to a RestClient.
    """

    def __init__(
        self,
        rest: RestClient,
        project_url: str,
        api_version: str = DEFAULT_API_VERSION,
    ):
        """
        Initialize provider.

        Args:
            rest: Authenticated REST client
            project_url: https://<host>/<organization>/<project>
            api_version: Value for the api-version query parameter
        """
        self._rest = rest
        self._project_url = project_url.rstrip("/")
        self._api_version = api_version

    @classmethod
    def from_settings(cls, rest: RestClient, settings: RollupSettings) -> "AzureDevOpsWorkItemProvider":
        return cls(rest, settings.project_url, settings.api_version)

    @property
    def name(self) -> str:
        """Provider identifier."""
        return "azure_devops"

    def _url(self, path: str, **params: str) -> str:
        query = urlencode({**params, "api-version": self._api_version}, quote_via=quote)
        return f"{self._project_url}/_apis/wit/{path}?{query}"

    # --- Read Operations ---

    def run_query(self, query: str) -> dict[str, Any]:
        return self._rest.call("POST", self._url("wiql"), json_body={"query": query})

    def get_fields_batch(self, item_ids: list[int], field_refs: list[str]) -> dict[str, Any]:
        body = {"ids": list(item_ids), "fields": list(field_refs)}
        return self._rest.call("POST", self._url("workitemsbatch"), json_body=body)

    def get_work_item(self, item_id: int, field_refs: list[str]) -> dict[str, Any]:
        url = self._url(f"workitems/{int(item_id)}", fields=",".join(field_refs))
        return self._rest.call("GET", url)

    # --- Write Operations ---

    def patch_work_item(self, item_id: int, document: list[dict[str, Any]]) -> dict[str, Any]:
        if not isinstance(document, list):
            raise TypeError("Patch document must be a list of operations")
        return self._rest.call(
            "PATCH",
            self._url(f"workitems/{int(item_id)}"),
            json_body=document,
            content_type=JSON_PATCH_CONTENT_TYPE,
        )
