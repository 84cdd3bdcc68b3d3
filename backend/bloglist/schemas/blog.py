"""
Bloglist Backend — Blog Request/Response Schemas
=================================================

What:  Pydantic models defining the blog API contract.
Why:   Responses expose exactly the public fields (`id`, never `user_id` or
       any other storage column) and the owner expanded to a small object.

Request fields are Optional on purpose: a missing title or url must produce
the 400 ValidationError from the validation helpers, not FastAPI's generic
schema error.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field

# blogs.likes is a 32-bit INTEGER column
MAX_LIKES = 2**31 - 1


class BlogCreate(BaseModel):
    """Body of POST /api/blogs."""
    title: Optional[str] = Field(default=None, description="Blog title (required)")
    url: Optional[str] = Field(default=None, description="Blog URL (required)")
    author: Optional[str] = Field(default=None, description="Author display name")
    likes: Optional[int] = Field(
        default=None, ge=0, le=MAX_LIKES, description="Initial likes, defaults to 0"
    )


class BlogOwner(BaseModel):
    """Owner of a blog as shown in blog listings."""
    id: uuid.UUID
    username: str
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class BlogResponse(BaseModel):
    """
    Full representation of a blog.

    Returned by GET /api/blogs (array), POST /api/blogs and
    PUT /api/blogs/{id}.
    """
    id: uuid.UUID = Field(description="Public blog identifier")
    title: str
    author: Optional[str] = None
    url: str
    likes: int = Field(description="Number of likes")
    user: Optional[BlogOwner] = Field(default=None, description="Owning user")

    model_config = {"from_attributes": True}
