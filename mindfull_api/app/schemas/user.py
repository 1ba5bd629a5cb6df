"""
Field table and read model for users.

Passwords are stored and returned as opaque strings.  Nothing hashes
them; see DESIGN.md before exposing this API beyond a trusted client.
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field

from .fields import ResourceField, serialize


USER_FIELDS = (
    ResourceField("username", str, escape=True),
    ResourceField("pw", str, escape=True),
)


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    username: str = Field(..., example="Newbie")
    pw: str = Field(..., example="654321")


def serialize_user(record: Mapping[str, Any]) -> UserRead:
    """Convert a ``mindfull_users`` row to a sanitized ``UserRead``."""
    return UserRead(**serialize(USER_FIELDS, record))
