"""
Bloglist Backend — Bearer Token Authentication
===============================================

What:  FastAPI dependencies that turn `Authorization: Bearer <token>` into
       an AuthContext.
Why a dependency (not a BaseHTTPMiddleware):
    Only some routes require a caller, and the resolved user is handed to
    the handler as an argument. Nothing is written to request.state, so a
    handler cannot observe a half-authenticated request.

Usage:
    @router.post("/blogs")
    async def create_blog(auth: AuthContext = Depends(get_auth_context)): ...
"""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from bloglist.database import get_db_session
from bloglist.exceptions import UnauthorizedError
from bloglist.services.auth_service import AuthContext, auth_service


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pulls the token out of an Authorization header value.

    Raises:
        UnauthorizedError: "token missing" when the header is absent or empty,
                           "token missing or invalid" for any other scheme
    """
    raw = (authorization or "").strip()
    if not raw:
        raise UnauthorizedError(message="token missing")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise UnauthorizedError(message="token missing or invalid")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise UnauthorizedError(message="token missing or invalid")
    return token


async def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> str:
    return extract_bearer_token(authorization)


async def get_auth_context(
    token: str = Depends(get_bearer_token),
    db: AsyncSession = Depends(get_db_session),
) -> AuthContext:
    return await auth_service.resolve_token(db, token)
