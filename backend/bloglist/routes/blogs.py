"""
Bloglist Backend — Blog Route Handlers
=======================================

What:  /api/blogs endpoints.
How:   Parse the path id, resolve the caller where required, delegate to
       BlogService. Errors are raised, never returned; the global handlers
       in main.py format them.

Endpoint Inventory:
    GET    /api/blogs        list (public)
    POST   /api/blogs        create (bearer token)
    PUT    /api/blogs/{id}   like +1 (public, no ownership check)
    DELETE /api/blogs/{id}   delete (bearer token, owner only)
    DELETE /api/blogs        400 "id missing"
"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from bloglist.database import get_db_session
from bloglist.exceptions import BadRequestError
from bloglist.middleware.auth import get_auth_context
from bloglist.schemas.blog import BlogCreate, BlogResponse
from bloglist.schemas.common import ErrorResponse
from bloglist.services.auth_service import AuthContext
from bloglist.services.blog_service import blog_service
from bloglist.validation import parse_id

router = APIRouter(prefix="/api", tags=["Blogs"])


@router.get(
    "/blogs",
    response_model=List[BlogResponse],
    summary="List all blogs",
)
async def list_blogs(db: AsyncSession = Depends(get_db_session)) -> List[BlogResponse]:
    return await blog_service.list_blogs(db)


@router.post(
    "/blogs",
    status_code=201,
    response_model=BlogResponse,
    responses={
        400: {"description": "title or url missing", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Create a blog owned by the caller",
)
async def create_blog(
    body: BlogCreate,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    return await blog_service.create_blog(db, body, auth)


@router.put(
    "/blogs/{blog_id}",
    response_model=BlogResponse,
    responses={
        400: {"description": "Malformatted id", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Add one like to a blog",
    description="Any caller may like any blog; each call adds exactly one like.",
)
async def like_blog(
    blog_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> BlogResponse:
    return await blog_service.increment_likes(db, parse_id(blog_id))


@router.delete(
    "/blogs/{blog_id}",
    status_code=204,
    response_class=Response,
    responses={
        401: {"description": "Missing token or not the owner", "model": ErrorResponse},
        404: {"description": "Blog not found", "model": ErrorResponse},
    },
    summary="Delete a blog owned by the caller",
)
async def delete_blog(
    blog_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await blog_service.delete_blog(db, parse_id(blog_id), auth)
    return Response(status_code=204)


@router.delete(
    "/blogs",
    status_code=400,
    responses={400: {"description": "id missing", "model": ErrorResponse}},
    summary="Rejects deletes without an id",
)
async def delete_blog_without_id() -> None:
    raise BadRequestError(message="id missing")
