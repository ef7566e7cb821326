"""Conversion between WorkOrder and its MongoDB document."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Mapping

from work_orders.domain.models import WorkOrder, as_utc

# attribute name -> document field name
STRING_FIELDS = {
    "order_id": "orderId",
    "size": "size",
    "filled": "filled",
    "status": "status",
    "ticker": "ticker",
    "mic": "mic",
    "action": "action",
}
DATETIME_FIELDS = {
    "timestamp": "timestamp",
    "last_modified": "last_modified",
}

ORDER_ID_FIELD = STRING_FIELDS["order_id"]
TIMESTAMP_FIELD = DATETIME_FIELDS["timestamp"]

PROJECTION: dict[str, bool] = {
    "_id": False,
    **{field: True for field in STRING_FIELDS.values()},
    **{field: True for field in DATETIME_FIELDS.values()},
}


class FieldState(Enum):
    PRESENT = "present"
    MISSING = "missing"
    MALFORMED = "malformed"


def _parse_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, str):
        try:
            return as_utc(datetime.fromisoformat(value))
        except ValueError:
            return None
    return None


def to_document(order: WorkOrder) -> dict[str, Any]:
    """Map a WorkOrder to a new document."""
    doc: dict[str, Any] = {
        field: getattr(order, attr) for attr, field in STRING_FIELDS.items()
    }
    for attr, field in DATETIME_FIELDS.items():
        doc[field] = as_utc(getattr(order, attr))
    return doc


def from_document(doc: Mapping[str, Any]) -> WorkOrder:
    """
    Map a document to a WorkOrder.

    Never fails on bad field values: strings that are missing or not strings
    become "", datetimes that are missing or unparsable become the current
    time. Use inspect_document() to find out whether that happened.
    """
    values: dict[str, Any] = {}
    for attr, field in STRING_FIELDS.items():
        value = doc.get(field)
        values[attr] = value if isinstance(value, str) else ""

    now = datetime.now(UTC)
    for attr, field in DATETIME_FIELDS.items():
        values[attr] = _parse_datetime(doc.get(field)) or now

    return WorkOrder(**values)


def inspect_document(doc: Mapping[str, Any]) -> dict[str, FieldState]:
    """Report, per document field, whether it is present, missing or malformed."""
    states: dict[str, FieldState] = {}
    for field in STRING_FIELDS.values():
        if field not in doc or doc[field] is None:
            states[field] = FieldState.MISSING
        elif isinstance(doc[field], str):
            states[field] = FieldState.PRESENT
        else:
            states[field] = FieldState.MALFORMED
    for field in DATETIME_FIELDS.values():
        if field not in doc or doc[field] is None:
            states[field] = FieldState.MISSING
        elif _parse_datetime(doc[field]) is not None:
            states[field] = FieldState.PRESENT
        else:
            states[field] = FieldState.MALFORMED
    return states


def degraded_fields(states: Mapping[str, FieldState]) -> list[str]:
    return [field for field, state in states.items() if state is not FieldState.PRESENT]
