"""
Bloglist Backend — User Route Handlers
=======================================

What:  POST /api/users (register) and GET /api/users (list with blogs).
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bloglist.database import get_db_session
from bloglist.schemas.common import ErrorResponse
from bloglist.schemas.user import UserCreate, UserResponse
from bloglist.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    status_code=201,
    response_model=UserResponse,
    responses={400: {"description": "Validation failed", "model": ErrorResponse}},
    summary="Register a user",
    description=(
        "Username and password must each be at least 3 characters and the "
        "username must be unique. The password is stored as a bcrypt digest only."
    ),
)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.create_user(db, body)


@router.get(
    "/users",
    response_model=List[UserResponse],
    summary="List users with their blogs",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.list_users(db)
