"""Summing a numeric field across work items with one batched fetch."""

from collections.abc import Sequence
from numbers import Real
from typing import Any

from rollup.logger import get_logger
from rollup.workitem.client import WorkItemClient
from rollup.workitem.errors import MalformedResponseError
from rollup.workitem.types import FieldLookup

log = get_logger("AGGREGATE")


def field_value_to_float(value: Any, field_ref: str = "") -> float:
    """
    Convert a raw field value to a float.

    None and blank strings count as 0. Numeric strings are parsed.

    Raises:
        MalformedResponseError: For values that are not numeric
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise MalformedResponseError(f"Field {field_ref} has non-numeric value {value!r}")
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        try:
            return float(value)
        except ValueError:
            pass
    raise MalformedResponseError(f"Field {field_ref} has non-numeric value {value!r}")


def sum_field(client: WorkItemClient, item_ids: Sequence[int], field_ref: str) -> float:
    """
    Sum one field across work items.

    Args:
        client: Work item client
        item_ids: IDs to aggregate; empty means no request is made
        field_ref: Field reference name to sum

    Returns:
        Total of the field values, missing or null values counting as 0

    Raises:
        RemoteCallError: If the batch fetch fails
        MalformedResponseError: If the batch response has no item list
    """
    if not item_ids:
        log.info("No work items to aggregate", field_ref=field_ref)
        return 0.0

    response = client.get_fields_batch(list(item_ids), [field_ref])
    items = response.get("value") if isinstance(response, dict) else None
    if not isinstance(items, list):
        raise MalformedResponseError("Batch response is missing its 'value' list")

    total = 0.0
    for item in items:
        fields = item.get("fields") if isinstance(item, dict) else None
        lookup = FieldLookup.from_fields(fields, field_ref)
        if lookup.present:
            total += field_value_to_float(lookup.value, field_ref)

    log.info(
        f"Summed {field_ref} across {len(items)} work items",
        field_ref=field_ref,
        item_count=len(items),
        total=total,
    )
    return total
