from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object; users are fixed seed data and never mutated.
    """

    user_id: str
    email: str
    name: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "name": self.name, "role": self.role.value}

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            user_id=str(data["id"]),
            email=str(data["email"]),
            name=str(data["name"]),
            role=Role(data["role"]),
        )
