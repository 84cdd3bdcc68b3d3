"""
Bloglist Backend — User & Login Schemas
========================================

What:  Pydantic models for /api/users and /api/login.

Security:
    No response model declares a password field, so the bcrypt digest can
    never be serialized even if a handler passes the ORM object straight
    through.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Body of POST /api/users. Presence and length are checked by validation helpers."""
    username: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = None


class UserBlog(BaseModel):
    """A blog as listed under its owner."""
    id: uuid.UUID
    title: str
    author: Optional[str] = None
    url: str
    likes: int

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    id: uuid.UUID
    username: str
    name: Optional[str] = None
    blogs: List[UserBlog] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(BaseModel):
    """
    Returned by POST /api/login.

    The client sends `token` back as `Authorization: Bearer <token>`.
    """
    token: str
    username: str
    name: Optional[str] = None
