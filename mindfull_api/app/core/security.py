"""
Bearer token gate for the API.

Every route requires an ``Authorization: Bearer <token>`` header whose
token matches ``settings.api_token``.  The check is a FastAPI
dependency so it can be attached to routers or individual routes via
``Depends(require_api_token)``.  Token issuance and rotation happen
outside this service.
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings


logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized request",
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_api_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Dependency that rejects requests without the configured bearer token.

    Raises HTTP 401 when the header is missing, is not a bearer
    credential, or carries a token other than ``settings.api_token``.
    An unset ``api_token`` rejects everything.  Returns the token on
    success.
    """
    if credentials is None:
        logger.warning("Request without bearer token rejected")
        raise _unauthorized()
    token = credentials.credentials
    expected = settings.api_token
    # Constant‑time comparison to prevent timing attacks
    if not expected or not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Request with invalid bearer token rejected")
        raise _unauthorized()
    return token
