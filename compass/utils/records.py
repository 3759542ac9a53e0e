"""
Helpers for building dataclass records from plain mappings (YAML/JSON input).

Loading is the only place COMPASS raises on bad input; scoring functions are
total over well-formed records.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from compass.utils.timestamp import parse_timestamp

E = TypeVar("E", bound=Enum)


class InvalidRecordError(ValueError):
    """
    Raised when a mapping cannot be turned into a record.

    Attributes:
        record_type: Name of the record being built (e.g., "Job")
        field_name: Offending field, if known
    """

    def __init__(self, message: str, record_type: Optional[str] = None, field_name: Optional[str] = None):
        self.message = message
        self.record_type = record_type
        self.field_name = field_name

        parts = [message]
        if record_type:
            parts.append(f"Record: {record_type}")
        if field_name:
            parts.append(f"Field: {field_name}")
        super().__init__("\n".join(parts))


def require(data: Mapping[str, Any], key: str, record_type: str) -> Any:
    """Return data[key], raising InvalidRecordError if it is missing or None."""
    if not isinstance(data, Mapping):
        raise InvalidRecordError(f"Expected a mapping, got {type(data).__name__}", record_type)
    if data.get(key) is None:
        raise InvalidRecordError(f"Missing required field '{key}'", record_type, key)
    return data[key]


def optional_datetime(data: Mapping[str, Any], key: str, record_type: str) -> Optional[datetime]:
    """Parse an optional ISO 8601 field."""
    try:
        return parse_timestamp(data.get(key))
    except (ValueError, TypeError) as e:
        raise InvalidRecordError(f"Invalid timestamp {data.get(key)!r}: {e}", record_type, key) from e


def required_datetime(data: Mapping[str, Any], key: str, record_type: str) -> datetime:
    require(data, key, record_type)
    return optional_datetime(data, key, record_type)


def enum_value(enum_type: Type[E], value: Any, record_type: str, key: str) -> E:
    """Coerce a raw value (or existing member) to an enum member."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidRecordError(
            f"Invalid value {value!r} (expected one of: {allowed})", record_type, key
        ) from e


def isoformat_or_none(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
