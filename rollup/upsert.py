"""
Writing the rollup total to the target work item.

The field is replaced when the item already carries it and added
otherwise. Exactly one patch operation is sent per run.
"""

from rollup.logger import get_logger
from rollup.workitem.client import WorkItemClient
from rollup.workitem.errors import MalformedResponseError
from rollup.workitem.types import FieldLookup, PatchOp, PatchOperation, UpsertResult

log = get_logger("UPSERT")


def lookup_target_field(client: WorkItemClient, item_id: int, field_ref: str) -> FieldLookup:
    """Read the target item restricted to field_ref and report its presence."""
    item = client.get_work_item(item_id, [field_ref])
    fields = item.get("fields") if isinstance(item, dict) else None
    return FieldLookup.from_fields(fields, field_ref)


def plan_operation(lookup: FieldLookup, field_ref: str, total: float) -> PatchOperation:
    """Choose replace for an existing field (even if null), add otherwise."""
    op = PatchOp.REPLACE if lookup.present else PatchOp.ADD
    return PatchOperation.for_field(op, field_ref, total)


def upsert_field(client: WorkItemClient, item_id: int, field_ref: str, total: float) -> UpsertResult:
    """
    Set field_ref on a work item to total.

    Args:
        client: Work item client
        item_id: Target work item ID
        field_ref: Field reference to write
        total: Value to write

    Returns:
        UpsertResult describing the applied operation

    Raises:
        RemoteCallError: If reading or patching the item fails
        MalformedResponseError: If the patch response carries no item ID
    """
    lookup = lookup_target_field(client, item_id, field_ref)
    operation = plan_operation(lookup, field_ref, total)
    log.info(
        f"Applying {operation.op.value} to {operation.path}",
        work_item_id=item_id,
        op=operation.op.value,
        path=operation.path,
        value=total,
    )

    updated = client.apply_patch(item_id, operation)
    if not isinstance(updated, dict) or "id" not in updated:
        raise MalformedResponseError(f"Update of work item {item_id} returned no item ID")

    written = FieldLookup.from_fields(updated.get("fields"), field_ref)
    confirmed = False
    if written.present and written.value is not None:
        try:
            confirmed = float(written.value) == float(total)
        except (TypeError, ValueError):
            confirmed = False

    result = UpsertResult(
        item_id=int(updated["id"]),
        field_ref=field_ref,
        value=total,
        operation=operation.op,
        confirmed=confirmed,
    )
    if not confirmed:
        log.warning(
            "Update response did not echo the written value",
            work_item_id=result.item_id,
            field_ref=field_ref,
            returned=written.value,
        )
    return result
