"""Cashier sub-accounts of a center: permissions and venue access."""

import logging

from accounts.directory import UserDirectory
from common.actors import Actor
from common.errors import InvalidIdError
from notifications.mailers import CashierInvitation, CashierNotifier
from venues.domain import (
    Cashier,
    CashierId,
    CashierNotFoundError,
    CashierPermissions,
    DuplicateCashierError,
    InvalidPermissionsError,
    VenueId,
    VenueNotOwnedError,
)
from venues.stores.interfaces import CashierStore, VenueStore

logger = logging.getLogger(__name__)


class CashierService:
    def __init__(
        self,
        cashier_store: CashierStore,
        venue_store: VenueStore,
        users: UserDirectory,
        notifier: CashierNotifier,
    ) -> None:
        self._cashiers = cashier_store
        self._venues = venue_store
        self._users = users
        self._notifier = notifier

    def list_cashiers(self, actor: Actor) -> list[Cashier]:
        return self._cashiers.list_cashiers(None if actor.is_admin else actor.user_id)

    def get_cashier(self, actor: Actor, cashier_id: str) -> Cashier:
        """Return a cashier of the caller. Other centers' cashiers are reported as missing."""
        try:
            parsed = CashierId.from_string(cashier_id)
        except ValueError:
            raise InvalidIdError("cashier")
        cashier = self._cashiers.get_cashier(parsed)
        if cashier is None or not actor.owns(cashier.owner_id):
            raise CashierNotFoundError()
        return cashier

    def create_cashier(
        self,
        actor: Actor,
        email: str,
        name: str = "",
        permissions: dict | None = None,
        venue_ids: list[str] | None = None,
    ) -> Cashier:
        """Attach a user (created on demand) as cashier of the calling center.

        Raises:
            InvalidPermissionsError: If the permission map has unknown keys or non-boolean values.
            InvalidIdError: If a venue id is malformed.
            VenueNotOwnedError: If a venue belongs to another center. Nothing is written.
            DuplicateCashierError: If the user is already a cashier of this center.
        """
        granted = CashierPermissions.defaults() if permissions is None else _parse_permissions(permissions)
        venues = self._owned_venues(actor.user_id, venue_ids or [])

        user = self._users.find_by_email(email)
        temporary_password = None
        if user is not None and self._cashiers.exists(user.id, actor.user_id):
            raise DuplicateCashierError()
        if user is None:
            user, temporary_password = self._users.create_cashier_user(email, name)

        cashier = self._cashiers.create_cashier(user.id, actor.user_id, granted, venues)
        logger.info("Cashier %s added for owner %s", cashier.id, actor.user_id)
        self._invite(actor, cashier, user.username, name or user.name, temporary_password)
        return cashier

    def update_permissions(self, actor: Actor, cashier_id: str, permissions: dict) -> Cashier:
        """Replace the permission set; keys not supplied are revoked."""
        cashier = self.get_cashier(actor, cashier_id)
        return self._cashiers.update_permissions(cashier.id, _parse_permissions(permissions))

    def update_venues(self, actor: Actor, cashier_id: str, venue_ids: list[str]) -> Cashier:
        """Replace the venue set. Any venue outside the owner's rejects the whole update."""
        cashier = self.get_cashier(actor, cashier_id)
        venues = self._owned_venues(cashier.owner_id, venue_ids)
        updated = self._cashiers.replace_venues(cashier.id, venues)
        logger.info("Cashier %s venue access set to %d venues", cashier.id, len(updated.venue_ids))
        return updated

    def delete_cashier(self, actor: Actor, cashier_id: str) -> None:
        cashier = self.get_cashier(actor, cashier_id)
        self._cashiers.delete_cashier(cashier.id)
        logger.info("Cashier %s removed by user %s", cashier.id, actor.user_id)

    def _owned_venues(self, owner_id: int, venue_ids: list[str]) -> list[VenueId]:
        parsed = []
        for venue_id in venue_ids:
            try:
                parsed.append(VenueId.from_string(venue_id))
            except ValueError:
                raise InvalidIdError("venue")
        owned = self._venues.owned_venue_ids(owner_id)
        for venue_id in parsed:
            if venue_id.value not in owned:
                raise VenueNotOwnedError(str(venue_id))
        return parsed

    def _invite(
        self, actor: Actor, cashier: Cashier, username: str, name: str, temporary_password: str | None
    ) -> None:
        owner = self._users.get(actor.user_id)
        invitation = CashierInvitation(
            recipient=cashier.email,
            name=name or cashier.email,
            username=username,
            owner_name=owner.name if owner else "Center Owner",
            temporary_password=temporary_password,
        )
        try:
            self._notifier.send_cashier_invitation(invitation)
        except Exception:
            logger.exception("Failed to send cashier invitation to %s", cashier.email)


def _parse_permissions(data: dict) -> CashierPermissions:
    try:
        return CashierPermissions.from_payload(data)
    except ValueError as exc:
        raise InvalidPermissionsError(str(exc))
