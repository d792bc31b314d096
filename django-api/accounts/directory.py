"""User lookups and provisioning used by other apps."""

import logging
import secrets
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    email: str
    name: str
    role: str


def _to_record(user) -> UserRecord:
    return UserRecord(id=user.pk, username=user.username, email=user.email, name=user.display_name, role=user.role)


class UserDirectory:
    """Reads and creates accounts through the configured user model."""

    def get(self, user_id: int) -> UserRecord | None:
        user = get_user_model().objects.filter(pk=user_id).first()
        return _to_record(user) if user else None

    def find_by_email(self, email: str) -> UserRecord | None:
        user = get_user_model().objects.filter(email__iexact=email).first()
        return _to_record(user) if user else None

    def create_cashier_user(self, email: str, name: str = "") -> tuple[UserRecord, str]:
        """Create a cashier account with a temporary password; returns the record and the password."""
        User = get_user_model()
        password = secrets.token_hex(4)
        first_name, _, last_name = name.strip().partition(" ")
        with transaction.atomic():
            user = User.objects.create_user(
                username=self._free_username(email),
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=User.Role.CASHIER,
            )
        logger.info("Created cashier account %s", user.pk)
        return _to_record(user), password

    def _free_username(self, email: str) -> str:
        User = get_user_model()
        base = email.split("@", 1)[0][:140] or "cashier"
        candidate, suffix = base, 1
        while User.objects.filter(username=candidate).exists():
            suffix += 1
            candidate = f"{base}{suffix}"
        return candidate
