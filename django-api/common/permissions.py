"""Role-based DRF permission classes."""

from rest_framework.permissions import BasePermission

ADMIN = "admin"
CUSTOMER = "customer"
EVENT_MANAGER = "eventManager"
CENTER = "center"
CASHIER = "cashier"


def role_of(user) -> str | None:
    if not user or not user.is_authenticated:
        return None
    if user.is_superuser:
        return ADMIN
    return getattr(user, "role", None)


class HasRole(BasePermission):
    """Allow authenticated users whose role is in ``allowed_roles``."""

    allowed_roles: tuple[str, ...] = ()
    message = "Your role is not allowed to perform this action"

    def has_permission(self, request, view) -> bool:
        return role_of(request.user) in self.allowed_roles


def roles(*allowed: str) -> type[HasRole]:
    """Build a permission class for the given roles, e.g. ``roles(CENTER, ADMIN)``."""
    name = "Requires" + "Or".join(role[0].upper() + role[1:] for role in allowed)
    return type(name, (HasRole,), {"allowed_roles": tuple(allowed)})
