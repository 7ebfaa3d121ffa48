"""
Release rollup orchestration.

Runs the stages in order: query Features, sum the source field, write
the total to the release item. Any failure stops the run; nothing is
written before the last stage.
"""

from rollup.aggregate import sum_field
from rollup.logger import get_logger
from rollup.query import run_feature_query
from rollup.upsert import lookup_target_field, plan_operation, upsert_field
from rollup.workitem.client import WorkItemClient
from rollup.workitem.config import RollupSettings
from rollup.workitem.types import RollupResult

log = get_logger("ORCHESTRATOR")


def run_rollup(settings: RollupSettings, client: WorkItemClient) -> RollupResult:
    """
    Execute one rollup.

    Args:
        settings: Resolved run settings
        client: Authenticated work item client

    Returns:
        RollupResult with the matched IDs, the total and the write outcome
    """
    log.info(
        "Starting release rollup",
        organization=settings.organization,
        project=settings.project,
        iteration_path=settings.iteration_path,
        tag=settings.tag,
        source_field=settings.source_field,
        target_field=settings.target_field,
        release_id=settings.release_id,
        dry_run=settings.dry_run,
    )

    item_ids = run_feature_query(client, settings.iteration_path, settings.tag)
    log.info(f"Found {len(item_ids)} Features", item_count=len(item_ids), item_ids=item_ids)

    total = sum_field(client, item_ids, settings.source_field)
    log.info(f"Computed total {total}", source_field=settings.source_field, total=total)

    if settings.dry_run:
        lookup = lookup_target_field(client, settings.release_id, settings.target_field)
        planned = plan_operation(lookup, settings.target_field, total)
        log.info(
            "Dry run: skipping update",
            work_item_id=settings.release_id,
            op=planned.op.value,
            path=planned.path,
            value=total,
        )
        return RollupResult(item_ids=item_ids, total=total, planned=planned)

    upsert = upsert_field(client, settings.release_id, settings.target_field, total)
    log.info(
        f"Set {upsert.field_ref} on work item {upsert.item_id} to {upsert.value}",
        work_item_id=upsert.item_id,
        target_field=upsert.field_ref,
        value=upsert.value,
        op=upsert.operation.value,
        confirmed=upsert.confirmed,
    )
    return RollupResult(item_ids=item_ids, total=total, upsert=upsert)
