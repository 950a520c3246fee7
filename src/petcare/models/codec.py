"""Entity <-> JSON record codec.

Datetimes are written as ISO-8601 with their UTC offset, enums as their
string values, and absent optionals as explicit ``null``. Decoding restores
``None`` for ``null`` rather than substituting defaults, so a record
round-trips field for field.
"""

from __future__ import annotations

from dataclasses import MISSING, fields
from datetime import datetime
from enum import Enum
from functools import cache
from typing import Any, TypeVar, get_args, get_type_hints

from petcare.core.exceptions import ValidationError
from petcare.scheduling.recurrence import RecurrenceRule

from .medication import Medication
from .pet import Pet
from .reminder import Reminder
from .task import Task
from .vaccine import Vaccine

Entity = Pet | Task | Reminder | Vaccine | Medication
T = TypeVar("T", Pet, Task, Reminder, Vaccine, Medication)

KINDS: dict[str, type] = {
    "pets": Pet,
    "tasks": Task,
    "reminders": Reminder,
    "vaccines": Vaccine,
    "medications": Medication,
}


def kind_of(entity_type: type) -> str:
    for kind, cls in KINDS.items():
        if cls is entity_type:
            return kind
    raise KeyError(f"No collection kind for {entity_type.__name__}")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _encode_value(name: str, value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise ValidationError(name, "timestamps must be timezone-aware")
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_record(entity: Entity) -> dict[str, Any]:
    """Encode an entity as a JSON-compatible dict."""
    record: dict[str, Any] = {}
    for f in fields(entity):
        value = getattr(entity, f.name)
        if f.name == "recurrence":
            record["is_recurring"] = value is not None
            record["recurrence_type"] = value.type.value if value is not None else None
            record["recurrence_interval"] = value.interval if value is not None else None
            continue
        record[f.name] = _encode_value(f.name, value)
    return record


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


@cache
def _hints(cls: type) -> dict[str, Any]:
    return get_type_hints(cls)


def _parse_datetime(name: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError as e:
            raise ValidationError(name, f"invalid timestamp {value!r}") from e
    if parsed.tzinfo is None:
        raise ValidationError(name, f"timestamp {value!r} has no UTC offset")
    return parsed


def _decode_value(name: str, hint: Any, value: Any) -> Any:
    if value is None:
        return None
    members = get_args(hint) or (hint,)
    if datetime in members:
        return _parse_datetime(name, value)
    return value  # enums are coerced by the model's own validation


def _decode_recurrence(record: dict[str, Any]) -> RecurrenceRule | None:
    if record.get("is_recurring") is False:
        return None
    rtype = record.get("recurrence_type")
    interval = record.get("recurrence_interval")
    if rtype is None and interval is None:
        return None
    if rtype is None or interval is None:
        raise ValidationError("recurrence", "type and interval must both be present or both absent")
    return RecurrenceRule(rtype, interval)


def from_record(cls: type[T], record: dict[str, Any]) -> T:
    """Decode a record produced by :func:`to_record` back into *cls*."""
    if not isinstance(record, dict):
        raise ValidationError(cls.__name__.lower(), f"expected an object, got {type(record).__name__}")
    hints = _hints(cls)
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name == "recurrence":
            kwargs["recurrence"] = _decode_recurrence(record)
            continue
        if f.name not in record:
            if f.default is MISSING and f.default_factory is MISSING:
                raise ValidationError(f.name, "missing required field")
            continue
        kwargs[f.name] = _decode_value(f.name, hints[f.name], record[f.name])
    return cls(**kwargs)


def encode_collection(entities: list[Entity]) -> list[dict[str, Any]]:
    return [to_record(e) for e in entities]


def decode_collection(kind: str, records: list[dict[str, Any]]) -> list[Any]:
    try:
        cls = KINDS[kind]
    except KeyError:
        raise ValidationError("kind", f"unknown collection kind {kind!r}") from None
    return [from_record(cls, r) for r in records]
