from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.enums import Role
from .model import User

DEMO_USERS: tuple[User, ...] = (
    User(user_id="1", email="user@company.com", name="John Doe", role=Role.USER),
    User(user_id="2", email="admin@company.com", name="Admin User", role=Role.ADMIN),
    User(user_id="3", email="jane@company.com", name="Jane Smith", role=Role.USER),
)

DEMO_PASSWORDS: dict[str, str] = {
    "user@company.com": "password123",
    "admin@company.com": "admin123",
    "jane@company.com": "password123",
}


class IdentityProvider(Protocol):
    """Credential check used by the session service.

    Note (DIP): a real directory/IdP can replace the static table without
    touching callers.
    """

    def verify(self, email: str, password: str) -> Optional[User]:
        raise NotImplementedError


class StaticIdentityProvider(IdentityProvider):
    """Fixed in-memory credential table (demo accounts)."""

    def __init__(self, users: Sequence[User] = DEMO_USERS, passwords: Mapping[str, str] = DEMO_PASSWORDS):
        self._users = {u.email: u for u in users}
        self._password_hashes = {email: generate_password_hash(pw) for email, pw in passwords.items()}

    @property
    def users(self) -> list[User]:
        return list(self._users.values())

    def verify(self, email: str, password: str) -> Optional[User]:
        user = self._users.get(email)
        password_hash = self._password_hashes.get(email)
        if not user or not password_hash:
            return None

        if not check_password_hash(password_hash, password or ""):
            return None
        return user
