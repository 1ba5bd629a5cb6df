"""
Shared helpers for resource field tables.

A resource is described by an ordered tuple of ``ResourceField``.  The
order matters: validation reports the first missing field in
declaration order.  Output is sanitized on the way out only; stored
values are never rewritten.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence


@dataclass(frozen=True)
class ResourceField:
    """A single non-id column of a resource.

    ``escape`` marks free‑text columns whose string values are HTML
    tag-escaped when serialized.
    """

    name: str
    type: type
    escape: bool = False


def missing_field(fields: Sequence[ResourceField], body: Mapping[str, Any]) -> Optional[str]:
    """Return the name of the first field that is absent or null in ``body``."""
    for field in fields:
        if body.get(field.name) is None:
            return field.name
    return None


def extract_fields(fields: Sequence[ResourceField], body: Mapping[str, Any]) -> Dict[str, Any]:
    """Pick the known fields present in ``body``; unknown keys are dropped."""
    return {field.name: body[field.name] for field in fields if field.name in body}


def count_supplied(values: Iterable[Any]) -> int:
    """Count truthy values.

    ``None``, ``0``, ``""``, ``False`` and empty lists or objects do not
    count as supplied, even when sent explicitly.
    """
    return sum(1 for value in values if value)


def escape_tags(value: str) -> str:
    """Encode ``<`` and ``>`` so stored text cannot open markup tags.

    Quotes and ampersands are left as written.
    """
    return value.replace("<", "&lt;").replace(">", "&gt;")


def serialize(fields: Sequence[ResourceField], record: Mapping[str, Any]) -> Dict[str, Any]:
    """Map a stored record to its wire form.

    Only ``id`` and the declared fields are kept.  String values of
    escaped fields go through ``escape_tags``; everything else passes
    through unchanged.
    """
    data: Dict[str, Any] = {"id": record["id"]}
    for field in fields:
        value = record[field.name]
        # Escape text fields to prevent XSS when rendering in clients
        if field.escape and isinstance(value, str):
            value = escape_tags(value)
        data[field.name] = value
    return data
