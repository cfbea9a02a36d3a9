"""Identity of the caller, passed explicitly into every use case."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from bookstore.domain.exceptions import AuthenticationError


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class UserContext:
    user_id: str
    role: Role = Role.USER


def require_user(user: UserContext | None) -> UserContext:
    """Return *user*, or raise AuthenticationError for anonymous callers."""
    if user is None or not user.user_id:
        raise AuthenticationError("Unauthorized")
    return user
