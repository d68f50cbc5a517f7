"""
Bearer token helpers.

Tokens are issued by the identity provider and signed with a shared secret;
the backend only verifies them. ``create_access_token`` exists for local
development and tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from collabx.core.settings import settings


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by the identity provider."""

    uid: str
    email: str = ""
    display_name: str = ""
    is_admin: bool = False

    @property
    def name(self) -> str:
        if self.display_name:
            return self.display_name
        if self.email:
            return self.email.split("@")[0]
        return "Anonymous"


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def identity_from_claims(claims: dict) -> Identity:
    uid = claims.get("sub")
    if not uid:
        raise ValueError("token has no subject")
    return Identity(
        uid=str(uid),
        email=claims.get("email") or "",
        display_name=claims.get("name") or "",
        is_admin=bool(claims.get("admin", False)),
    )
