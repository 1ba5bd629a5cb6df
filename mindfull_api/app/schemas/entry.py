"""
Field table and read model for journal entries.

An entry records one day: when it was written, the mood, a stress
level, three things the user is grateful for and free notes.  Each
entry belongs to a user through ``userid``.
"""

from typing import Any, Mapping, Union

from pydantic import BaseModel, Field

from .fields import ResourceField, serialize


ENTRY_FIELDS = (
    ResourceField("date_created", str),
    ResourceField("month_created", str, escape=True),
    ResourceField("mood", str, escape=True),
    ResourceField("stress_level", int),
    ResourceField("gratitude1", str, escape=True),
    ResourceField("gratitude2", str, escape=True),
    ResourceField("gratitude3", str, escape=True),
    ResourceField("notes", str, escape=True),
    ResourceField("userid", int),
)


class EntryRead(BaseModel):
    """Schema for reading a journal entry."""

    id: int
    date_created: str = Field(..., example="1/1/2021")
    month_created: str = Field(..., example="January")
    mood: str = Field(..., example="Happy")
    stress_level: Union[int, float, str] = Field(..., example=5)
    gratitude1: str
    gratitude2: str
    gratitude3: str
    notes: str
    userid: int


def serialize_entry(record: Mapping[str, Any]) -> EntryRead:
    """Convert a ``mindfull_entries`` row to a sanitized ``EntryRead``."""
    return EntryRead(**serialize(ENTRY_FIELDS, record))
