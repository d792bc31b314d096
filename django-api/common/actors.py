"""The authenticated caller as seen by services."""

from dataclasses import dataclass

from common.permissions import ADMIN, role_of


@dataclass(frozen=True)
class Actor:
    """Who is calling a service operation."""

    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN

    def owns(self, owner_id: int) -> bool:
        return self.is_admin or self.user_id == owner_id

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(user_id=user.pk, role=role_of(user) or "")
