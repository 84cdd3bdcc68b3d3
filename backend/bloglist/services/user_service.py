"""
Bloglist Backend — User Service
================================

What:  Account creation and listing.
Who:   Called by the /api/users route handlers.

Username uniqueness is checked twice: a lookup before insert (readable
message in the common case) and the unique index on users.username (catches
two concurrent registrations of the same name). Both surface as the same
ValidationError.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from starlette.concurrency import run_in_threadpool

from bloglist.exceptions import DatabaseError, ValidationError
from bloglist.models import User
from bloglist.schemas.user import UserCreate, UserResponse
from bloglist.services import security
from bloglist.validation import ensure_username_available, validate_new_user

logger = logging.getLogger(__name__)


class UserService:

    async def create_user(self, db: AsyncSession, body: UserCreate) -> UserResponse:
        """
        Validates and stores a new account with a bcrypt password digest.

        Raises:
            ValidationError: missing field, too short, or username taken
            DatabaseError: insert failed for another reason
        """
        validate_new_user(body)

        try:
            result = await db.execute(select(User).where(User.username == body.username))
            existing = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up username: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the user. Please try again.",
                context={"error_type": type(e).__name__},
            )
        ensure_username_available(existing)

        password_hash = await run_in_threadpool(security.hash_password, body.password)
        user = User(username=body.username, name=body.name, password_hash=password_hash)
        db.add(user)

        try:
            await db.flush()
        except IntegrityError:
            logger.info("Concurrent registration of username '%s'", body.username)
            raise ValidationError(message="expected username to be unique", field="username")
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the user. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("User %s created (username=%s)", user.id, user.username)
        return UserResponse(id=user.id, username=user.username, name=user.name, blogs=[])

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        """Returns every user with their blogs expanded."""
        try:
            result = await db.execute(
                select(User).options(selectinload(User.blogs)).order_by(User.created_at)
            )
            users = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing users: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve users. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [UserResponse.model_validate(user) for user in users]


user_service = UserService()
