"""
FastAPI Dependencies.

Shared dependencies for request handling: the database session, the
request ID, and the bearer-token gate that resolves the caller.
"""

import uuid
from typing import Annotated

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from voicenotes.backend.core.database import get_db_session
from voicenotes.backend.core.exceptions import AuthenticationError
from voicenotes.backend.core.logging import get_logger
from voicenotes.backend.models.user import User
from voicenotes.backend.services.auth import AuthService

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

# auto_error is off so a missing header goes through AuthenticationError (401)
bearer_scheme = HTTPBearer(auto_error=False, description="Access token from /auth/login")


async def get_request_id(request: Request) -> str:
    """
    Return the request ID assigned by RequestContextMiddleware.

    Falls back to the X-Request-ID header, then a fresh UUID, when the
    middleware is not installed.
    """
    request_id = getattr(request.state, "request_id", None)
    return request_id or request.headers.get("X-Request-ID") or str(uuid.uuid4())


RequestId = Annotated[str, Depends(get_request_id)]


async def get_current_user(
    db: DbSession,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> User:
    """
    Resolve the caller from the Authorization: Bearer header.

    The resolved user is the only identity services ever see; user ids
    sent by the client are never trusted.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    user = await AuthService(db).resolve_identity(credentials.credentials)
    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
