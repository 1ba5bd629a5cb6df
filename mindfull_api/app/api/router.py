"""
Top‑level API router.

Aggregates the resource routers under a unified prefix and puts the
bearer token gate in front of all of them.
"""

from fastapi import APIRouter, Depends

from mindfull_api.app.core.security import require_api_token

from .endpoints import entries, users

router = APIRouter(dependencies=[Depends(require_api_token)])

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(entries.router, prefix="/entries", tags=["entries"])
