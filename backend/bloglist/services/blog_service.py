"""
Bloglist Backend — Blog Service
================================

What:  Business logic for the blog collection: list, create, like, delete.
Who:   Called by the /api/blogs route handlers.

Rules enforced here:
    - create: title and url required; likes defaults to 0; owner is the
      authenticated caller and the blog joins the owner's blog list
    - increment_likes: +1 per call, any caller, no ownership check
    - delete: only the owner may delete (ForbiddenError otherwise)

Error Handling Strategy:
    SQLAlchemy errors are wrapped in DatabaseError (generic message, details
    logged). Application exceptions propagate unchanged.
"""

import logging
import uuid
from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bloglist.exceptions import DatabaseError, ForbiddenError, NotFoundError, UnauthorizedError
from bloglist.models import Blog, User
from bloglist.schemas.blog import BlogCreate, BlogResponse
from bloglist.services.auth_service import AuthContext
from bloglist.validation import validate_new_blog

logger = logging.getLogger(__name__)


class BlogService:
    """Business logic layer for blog operations."""

    async def list_blogs(self, db: AsyncSession) -> List[BlogResponse]:
        """
        Returns every blog with its owner expanded to {username, name, id}.

        Full scan, oldest first; there is no pagination.
        """
        try:
            result = await db.execute(
                select(Blog).options(selectinload(Blog.user)).order_by(Blog.created_at)
            )
            blogs = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing blogs: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve blogs. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [BlogResponse.model_validate(blog) for blog in blogs]

    async def create_blog(
        self,
        db: AsyncSession,
        body: BlogCreate,
        auth: AuthContext,
    ) -> BlogResponse:
        """
        Persists a new blog owned by the authenticated caller.

        Raises:
            ValidationError: title or url missing (nothing is written)
            UnauthorizedError: the caller's account vanished mid-request
            DatabaseError: insert failed
        """
        validate_new_blog(body)

        try:
            result = await db.execute(
                select(User).options(selectinload(User.blogs)).where(User.id == auth.user_id)
            )
            owner = result.scalar_one_or_none()
            if owner is None:
                raise UnauthorizedError(message="user not found")

            blog = Blog(
                title=body.title,
                author=body.author,
                url=body.url,
                likes=body.likes if body.likes is not None else 0,
            )
            # Appending sets blog.user through back_populates
            owner.blogs.append(blog)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating blog: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the blog. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Blog %s created by user %s", blog.id, auth.user_id)
        return BlogResponse.model_validate(blog)

    async def increment_likes(self, db: AsyncSession, blog_id: uuid.UUID) -> BlogResponse:
        """
        Adds exactly one like and returns the updated blog.

        A single UPDATE ... SET likes = likes + 1 keeps concurrent likes from
        overwriting each other.

        Raises:
            NotFoundError: no blog with this id
        """
        try:
            result = await db.execute(
                update(Blog)
                .where(Blog.id == blog_id)
                .values(likes=Blog.likes + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource="blog", resource_id=str(blog_id))

            refreshed = await db.execute(
                select(Blog)
                .options(selectinload(Blog.user))
                .where(Blog.id == blog_id)
                .execution_options(populate_existing=True)
            )
            blog = refreshed.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error liking blog %s: %s", blog_id, str(e))
            raise DatabaseError(
                message="Could not update the blog. Please try again.",
                context={"blog_id": str(blog_id)},
            )

        return BlogResponse.model_validate(blog)

    async def delete_blog(
        self,
        db: AsyncSession,
        blog_id: uuid.UUID,
        auth: AuthContext,
    ) -> None:
        """
        Removes a blog owned by the caller.

        Raises:
            NotFoundError: no blog with this id (404)
            ForbiddenError: caller is not the owner (401 "not authorized")
        """
        try:
            blog = await db.get(Blog, blog_id)
            if blog is None:
                raise NotFoundError(resource="blog", resource_id=str(blog_id))

            if blog.user_id != auth.user_id:
                logger.warning(
                    "User %s tried to delete blog %s owned by %s",
                    auth.user_id,
                    blog_id,
                    blog.user_id,
                )
                raise ForbiddenError()

            await db.delete(blog)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting blog %s: %s", blog_id, str(e))
            raise DatabaseError(
                message="Could not delete the blog. Please try again.",
                context={"blog_id": str(blog_id)},
            )

        logger.info("Blog %s deleted by user %s", blog_id, auth.user_id)


blog_service = BlogService()
