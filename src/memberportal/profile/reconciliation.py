"""Profile change reconciliation.

Stored records hold select options and linked records as ``{id, value, ...}``
objects; edit forms hold bare ids. These helpers normalize between the two,
compare values shape-aware and build a minimal update payload.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from memberportal.errors.exceptions import ValidationError
from memberportal.profile.fields import IDENTITY_KEYS, PROFILE_FIELDS, ProfileField


def _is_ref(value: Any) -> bool:
    """A select option or linked record object."""
    return isinstance(value, dict) and "id" in value


def _is_file(value: Any) -> bool:
    return isinstance(value, dict) and "url" in value and "id" not in value


def _ref_id(value: Any) -> Any:
    return value["id"] if _is_ref(value) else value


def normalize(value: Any) -> Any:
    """Convert store-shaped values into the bare-id shape used by edit forms.

    Scalars, dates, file lists and already-bare values pass through unchanged.
    """
    if _is_ref(value):
        return value["id"]
    if isinstance(value, list) and value and all(_is_ref(item) for item in value):
        return [item["id"] for item in value]
    return value


def normalize_record(record: dict[str, Any], fields: dict[str, ProfileField] | None = None) -> dict[str, Any]:
    """Project a stored record into form state keyed by field key."""
    fields = fields or PROFILE_FIELDS
    return {key: normalize(record.get(field.name)) for key, field in fields.items() if field.name in record}


def _multiset(items: list[Any]) -> Counter | None:
    try:
        return Counter(items)
    except TypeError:
        return None


def values_equal(a: Any, b: Any) -> bool:
    """Shape-aware equality; option/link arrays and file lists ignore order."""
    if a is None or b is None:
        return a is None and b is None

    if not isinstance(a, list) and not isinstance(b, list):
        if _is_ref(a) or _is_ref(b):
            return _ref_id(a) == _ref_id(b)
        return a == b

    if not (isinstance(a, list) and isinstance(b, list)):
        return False
    if len(a) != len(b):
        return False

    if any(_is_file(item) for item in a + b):
        if not all(_is_file(item) for item in a + b):
            return False
        return sorted(item["url"] for item in a) == sorted(item["url"] for item in b)

    ids_a = [_ref_id(item) for item in a]
    ids_b = [_ref_id(item) for item in b]
    counted_a, counted_b = _multiset(ids_a), _multiset(ids_b)
    if counted_a is None or counted_b is None:
        return ids_a == ids_b
    return counted_a == counted_b


def diff(
    original: dict[str, Any],
    patch: dict[str, Any],
    fields: dict[str, ProfileField] | None = None,
) -> dict[str, Any]:
    """Return ``{store field name: new value}`` for every patched field that changed.

    The identity field and read-only fields are never part of the result.
    Absent and null original values compare equal.
    """
    fields = fields or PROFILE_FIELDS
    unknown = sorted(key for key in patch if key not in IDENTITY_KEYS and key not in fields)
    if unknown:
        raise ValidationError("Unknown profile fields", details={"fields": unknown})

    changes: dict[str, Any] = {}
    for key, new_value in patch.items():
        if key in IDENTITY_KEYS:
            continue
        field = fields[key]
        if not field.editable:
            continue
        if not values_equal(original.get(field.name), new_value):
            changes[field.name] = new_value
    return changes


def to_store_value(value: Any) -> Any:
    """Convert one changed value back into the store write shape."""
    if value is None:
        return None
    if _is_ref(value):
        return value["id"]
    if isinstance(value, list):
        if not value:
            return []
        if all(_is_file(item) for item in value):
            return value
        return [_ref_id(item) for item in value]
    return value


def build_update_payload(changes: dict[str, Any]) -> dict[str, Any]:
    return {name: to_store_value(value) for name, value in changes.items()}
