"""
Bloglist Backend — Auth Service
================================

What:  Credential login and bearer-token resolution.
Who:   POST /api/login (login) and the `get_auth_context` dependency
       (resolve_token).

Flow (protected request):
    Authorization header → decode_access_token → user lookup → AuthContext

AuthContext is a frozen value object. Handlers receive it as an argument;
nothing is attached to or mutated on the request.
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from bloglist.exceptions import UnauthorizedError
from bloglist.models import User
from bloglist.schemas.user import LoginRequest, LoginResponse
from bloglist.services import security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "invalid username or password"


@dataclass(frozen=True)
class AuthContext:
    """The authenticated caller of a request."""
    user_id: uuid.UUID
    username: str
    name: Optional[str] = None


class AuthService:
    """Stateless; receives the session per call."""

    async def login(self, db: AsyncSession, body: LoginRequest) -> LoginResponse:
        """
        Verifies credentials and issues a signed token.

        The same message is returned for an unknown username and a wrong
        password so the endpoint cannot be used to enumerate accounts.

        Raises:
            UnauthorizedError: "invalid username or password"
        """
        if not body.username or not body.password:
            raise UnauthorizedError(message=INVALID_CREDENTIALS)

        result = await db.execute(select(User).where(User.username == body.username))
        user = result.scalar_one_or_none()

        password_correct = False
        if user is not None:
            # bcrypt is CPU-bound; keep it off the event loop
            password_correct = await run_in_threadpool(
                security.verify_password, user.password_hash, body.password
            )

        if not password_correct:
            logger.info("Failed login for username '%s'", body.username)
            raise UnauthorizedError(message=INVALID_CREDENTIALS)

        token = security.create_access_token(user_id=user.id, username=user.username)
        logger.info("User %s logged in", user.id)
        return LoginResponse(token=token, username=user.username, name=user.name)

    async def resolve_token(self, db: AsyncSession, token: str) -> AuthContext:
        """
        Turns a bearer token into the AuthContext of a live user.

        Raises:
            UnauthorizedError: "token invalid", "token expired" or "user not found"
        """
        try:
            payload = security.decode_access_token(token)
        except security.TokenError as exc:
            raise UnauthorizedError(message=exc.message)

        try:
            user_id = uuid.UUID(str(payload.get("id")))
        except ValueError:
            raise UnauthorizedError(message="token invalid")

        user = await db.get(User, user_id)
        if user is None:
            raise UnauthorizedError(message="user not found")

        return AuthContext(user_id=user.id, username=user.username, name=user.name)


auth_service = AuthService()
