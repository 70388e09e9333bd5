"""JSON serialization for report entities and the response envelope."""

import dataclasses
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


def to_jsonable(value: Any) -> Any:
    """Convert report entities into JSON-compatible structures.

    Dataclasses become dicts, Decimals become floats, dates become ISO
    strings and enums become their values. Dict keys are converted the
    same way so type-keyed summaries serialize as {"Asset": ...}.
    """
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)
        }
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {to_jsonable(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def success_envelope(data: Any) -> dict[str, Any]:
    """Wrap a result as {"success": true, "data": ...}."""
    return {"success": True, "data": to_jsonable(data)}


def error_envelope(message: str, error: Optional[str] = None) -> dict[str, Any]:
    """Build a failure payload as {"success": false, "message": ...}."""
    payload: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        payload["error"] = error
    return payload


def dumps(value: Any, indent: Optional[int] = 2) -> str:
    """Serialize a report, envelope or entity to a JSON string."""
    return json.dumps(to_jsonable(value), indent=indent)
