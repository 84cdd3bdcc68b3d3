"""
Bloglist Backend — Password & Token Primitives
===============================================

What:  Thin wrappers around bcrypt (password digests) and PyJWT (bearer
       tokens).
Who:   UserService (hash), AuthService (verify + sign) and the auth
       dependency (decode).

Token payload:
    {"username": str, "id": "<uuid>", "iat": int, "exp": int}

Tokens are stateless: there is no server-side session or revocation list.
A token stops working when it expires or when its user is deleted.
"""

import time
import uuid
from typing import Any, Dict

import bcrypt
import jwt

from bloglist.config import settings


class TokenError(Exception):
    """Token could not be decoded; `message` is safe to return to the client."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise ValueError("Password is empty.")
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(password, salt).decode("utf-8")


def verify_password(password_hash: str, plain_password: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        # Malformed stored digest or over-long password
        return False


def create_access_token(*, user_id: uuid.UUID, username: str) -> str:
    issued_at = int(time.time())
    payload = {
        "username": username,
        "id": str(user_id),
        "iat": issued_at,
        "exp": issued_at + settings.token_expire_minutes * 60,
    }
    return jwt.encode(payload, settings.secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verifies signature and expiry and returns the payload.

    Raises:
        TokenError: "token expired" or "token invalid"
    """
    raw = (token or "").strip()
    if not raw:
        raise TokenError("token invalid")

    try:
        payload = jwt.decode(
            raw,
            settings.secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "id"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenError("token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError("token invalid") from exc

    return payload
