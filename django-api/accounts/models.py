"""User account with a marketplace role."""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Platform user. Superusers are treated as admins regardless of ``role``."""

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        EVENT_MANAGER = "eventManager", "Event manager"
        CENTER = "center", "Center"
        CASHIER = "cashier", "Cashier"
        ADMIN = "admin", "Admin"

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.CUSTOMER)

    @property
    def is_admin(self) -> bool:
        return self.is_superuser or self.role == self.Role.ADMIN

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"
