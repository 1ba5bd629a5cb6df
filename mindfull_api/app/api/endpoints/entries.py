"""
Journal entry endpoints.

CRUD over ``mindfull_entries``.  Creating an entry requires all nine
fields; a patch may carry any subset of them.  Free‑text fields are
HTML escaped in every response.
"""

import posixpath
import sqlite3
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status

from mindfull_api.app.core.db import get_db
from mindfull_api.app.schemas.entry import ENTRY_FIELDS, EntryRead, serialize_entry
from mindfull_api.app.schemas.fields import count_supplied, extract_fields, missing_field
from mindfull_api.app.services.entry_service import EntryService


router = APIRouter()


async def entry_or_404(entry_id: int, conn: sqlite3.Connection = Depends(get_db)) -> sqlite3.Row:
    """Return the stored entry or raise HTTP 404."""
    entry = await EntryService.get_by_id(conn, entry_id)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry doesn't exist")
    return entry


@router.get("", response_model=List[EntryRead])
async def list_entries(conn: sqlite3.Connection = Depends(get_db)) -> List[EntryRead]:
    """Return all entries.  An empty table yields an empty list."""
    entries = await EntryService.get_all_entries(conn)
    return [serialize_entry(entry) for entry in entries]


@router.post("", response_model=EntryRead, status_code=status.HTTP_201_CREATED)
async def create_entry(
    request: Request,
    response: Response,
    body: Optional[Dict[str, Any]] = Body(None),
    conn: sqlite3.Connection = Depends(get_db),
) -> EntryRead:
    """Create a journal entry.

    Fields are checked in declaration order and the first one that is
    missing or null is reported with HTTP 400.  A ``userid`` without a
    matching user fails in storage and surfaces as HTTP 500.
    """
    body = body or {}
    missing = missing_field(ENTRY_FIELDS, body)
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing '{missing}' in request body",
        )
    new_entry = extract_fields(ENTRY_FIELDS, body)
    entry = await EntryService.insert_entry(conn, new_entry)
    response.headers["Location"] = posixpath.join(request.url.path, str(entry["id"]))
    return serialize_entry(entry)


@router.get("/{entry_id}", response_model=EntryRead)
async def get_entry(entry: sqlite3.Row = Depends(entry_or_404)) -> EntryRead:
    return serialize_entry(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry: sqlite3.Row = Depends(entry_or_404),
    conn: sqlite3.Connection = Depends(get_db),
) -> None:
    await EntryService.delete_entry(conn, entry["id"])
    return None


@router.patch("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_entry(
    entry: sqlite3.Row = Depends(entry_or_404),
    body: Optional[Dict[str, Any]] = Body(None),
    conn: sqlite3.Connection = Depends(get_db),
) -> None:
    """Update any subset of an entry's fields.

    HTTP 400 when none of the known fields carries a truthy value.
    A ``stress_level`` of 0 alone therefore counts as "nothing
    supplied", but it is still written when sent next to another
    field.
    """
    entry_to_update = extract_fields(ENTRY_FIELDS, body or {})
    if count_supplied(entry_to_update.values()) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must contain at least one updated field",
        )
    await EntryService.update_entry(conn, entry["id"], entry_to_update)
    return None
