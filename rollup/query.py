"""
Feature query for a release iteration.

Selects the IDs of non-removed Features under an iteration path that
carry a given tag, most recently changed first.
"""

from rollup.logger import get_logger
from rollup.workitem.client import WorkItemClient

log = get_logger("QUERY")

FEATURE_QUERY_TEMPLATE = (
    "SELECT [System.Id] FROM WorkItems "
    "WHERE [System.WorkItemType] = 'Feature' "
    "AND [System.State] <> 'Removed' "
    "AND [System.IterationPath] UNDER '{iteration_path}' "
    "AND [System.Tags] CONTAINS '{tag}' "
    "ORDER BY [System.ChangedDate] DESC"
)


def build_feature_query(iteration_path: str, tag: str) -> str:
    """Interpolate the iteration path and tag into the WIQL template."""
    return FEATURE_QUERY_TEMPLATE.format(iteration_path=iteration_path, tag=tag)


def run_feature_query(client: WorkItemClient, iteration_path: str, tag: str) -> list[int]:
    """
    Run the Feature query and return matching work item IDs in order.

    A response without a `workItems` list means no matches.

    Raises:
        RemoteCallError: If the query call fails
    """
    query = build_feature_query(iteration_path, tag)
    response = client.run_query(query)

    work_items = response.get("workItems") if isinstance(response, dict) else None
    if not work_items:
        log.info("Query matched no Features", iteration_path=iteration_path, tag=tag)
        return []

    item_ids = [int(item["id"]) for item in work_items if isinstance(item, dict) and "id" in item]
    log.info(f"Query matched {len(item_ids)} Features", item_count=len(item_ids))
    return item_ids
