"""
User endpoints.

CRUD over ``mindfull_users``.  Item routes first look the user up and
answer 404 when it does not exist; the found row is handed to the
route through the ``user_or_404`` dependency.
"""

import posixpath
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from mindfull_api.app.core.db import get_db
from mindfull_api.app.schemas.fields import count_supplied, extract_fields, missing_field
from mindfull_api.app.schemas.user import USER_FIELDS, UserRead, serialize_user
from mindfull_api.app.services.user_service import UserService


router = APIRouter()


async def user_or_404(user_id: int, conn: sqlite3.Connection = Depends(get_db)) -> sqlite3.Row:
    """Return the stored user or raise HTTP 404."""
    user = await UserService.get_by_id(conn, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User doesn't exist")
    return user


@router.get("", response_model=List[UserRead])
async def list_users(conn: sqlite3.Connection = Depends(get_db)) -> List[UserRead]:
    users = await UserService.get_all_users(conn)
    return [serialize_user(user) for user in users]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    response: Response,
    body: Optional[Dict[str, Any]] = Body(None),
    conn: sqlite3.Connection = Depends(get_db),
) -> UserRead:
    """Create a user from ``username`` and ``pw``.

    Both fields are required; the first one missing (or null) is
    reported with HTTP 400.  Other keys in the body are ignored.  The
    ``Location`` header points at the new user.
    """
    body = body or {}
    missing = missing_field(USER_FIELDS, body)
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing '{missing}' in request body",
        )
    new_user = extract_fields(USER_FIELDS, body)
    user = await UserService.insert_user(conn, new_user)
    response.headers["Location"] = posixpath.join(request.url.path, str(user["id"]))
    return serialize_user(user)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user: sqlite3.Row = Depends(user_or_404)) -> UserRead:
    return serialize_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user: sqlite3.Row = Depends(user_or_404),
    conn: sqlite3.Connection = Depends(get_db),
) -> None:
    """Delete a user (and, through the schema, their entries)."""
    await UserService.delete_user(conn, user["id"])
    return None


@router.patch("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user(
    user: sqlite3.Row = Depends(user_or_404),
    body: Optional[Dict[str, Any]] = Body(None),
    conn: sqlite3.Connection = Depends(get_db),
) -> None:
    """Update any of ``username`` and ``pw``.

    At least one of them must carry a truthy value or HTTP 400 is
    returned.  Every known key present in the body is written, falsy
    ones included; unknown keys are ignored.
    """
    user_to_update = extract_fields(USER_FIELDS, body or {})
    if count_supplied(user_to_update.values()) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must contain at least one updated field",
        )
    await UserService.update_user(conn, user["id"], user_to_update)
    return None
