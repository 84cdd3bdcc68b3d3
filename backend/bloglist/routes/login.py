"""
Bloglist Backend — Login Route Handler
=======================================

What:  POST /api/login exchanges username + password for a bearer token.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bloglist.database import get_db_session
from bloglist.schemas.common import ErrorResponse
from bloglist.schemas.user import LoginRequest, LoginResponse
from bloglist.services.auth_service import auth_service

router = APIRouter(prefix="/api", tags=["Login"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "invalid username or password", "model": ErrorResponse}},
    summary="Log in and receive a bearer token",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await auth_service.login(db, body)
