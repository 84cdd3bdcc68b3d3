"""
Bloglist Backend — Request Validation Helpers
==============================================

What:  Pure functions that check presence and shape of request fields.
Why:   The rules are business rules with their own 400 messages, so they are
       kept out of the pydantic schemas (which would answer 422) and out of
       the services (which stay focused on persistence).
Who:   Called by BlogService and UserService before touching the database.

Every helper either returns normally or raises ValidationError /
BadRequestError; none of them does I/O.
"""

import uuid
from typing import Optional

from bloglist.exceptions import BadRequestError, ValidationError
from bloglist.schemas.blog import BlogCreate
from bloglist.schemas.user import UserCreate

MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 3
# Column widths in models/user.py and models/blog.py
MAX_USERNAME_LENGTH = 64
MAX_NAME_LENGTH = 128
MAX_TITLE_LENGTH = 255
MAX_AUTHOR_LENGTH = 255
MAX_URL_LENGTH = 2048
# bcrypt only looks at the first 72 bytes and recent releases reject longer input
MAX_PASSWORD_BYTES = 72


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _check_max_length(value: Optional[str], limit: int, field: str) -> None:
    if value is not None and len(value) > limit:
        raise ValidationError(
            message=f"{field} must be at most {limit} characters long",
            field=field,
        )


def validate_new_blog(body: BlogCreate) -> None:
    """
    Checks that a new blog has a title and a url, and that every text field
    fits its column.

    Raises:
        ValidationError: "title missing", "url missing" or "<field> must be
                         at most N characters long"
    """
    if _is_blank(body.title):
        raise ValidationError(message="title missing", field="title")
    if _is_blank(body.url):
        raise ValidationError(message="url missing", field="url")

    _check_max_length(body.title, MAX_TITLE_LENGTH, "title")
    _check_max_length(body.author, MAX_AUTHOR_LENGTH, "author")
    _check_max_length(body.url, MAX_URL_LENGTH, "url")


def validate_new_user(body: UserCreate) -> None:
    """
    Checks username/password presence and length.

    Order matters: the "missing" message wins over the length messages so a
    client that omits both fields gets one clear answer.
    """
    if _is_blank(body.username) or not body.password:
        raise ValidationError(message="username or password missing")

    if len(body.username) < MIN_USERNAME_LENGTH:
        raise ValidationError(
            message=f"username must be at least {MIN_USERNAME_LENGTH} characters long",
            field="username",
        )
    _check_max_length(body.username, MAX_USERNAME_LENGTH, "username")
    _check_max_length(body.name, MAX_NAME_LENGTH, "name")

    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            message=f"password must be at least {MIN_PASSWORD_LENGTH} characters long",
            field="password",
        )

    if len(body.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            message=f"password must be at most {MAX_PASSWORD_BYTES} bytes long",
            field="password",
        )


def ensure_username_available(existing: Optional[object]) -> None:
    """Raises when a user with the requested username was found."""
    if existing is not None:
        raise ValidationError(message="expected username to be unique", field="username")


def parse_id(raw: Optional[str]) -> uuid.UUID:
    """
    Converts a path segment into a UUID.

    Raises:
        BadRequestError: "id missing" for an empty segment,
                         "malformatted id" for anything that is not a UUID
    """
    if _is_blank(raw):
        raise BadRequestError(message="id missing")
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        raise BadRequestError(message="malformatted id", context={"id": raw})
