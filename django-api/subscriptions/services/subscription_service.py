"""Subscription plans and usage accounting for organizers."""

import logging
from uuid import UUID

from django.conf import settings
from django.utils import timezone

from common.actors import Actor
from common.errors import ErrorCode, InvalidIdError, ValidationError
from common.permissions import ADMIN, EVENT_MANAGER
from events.domain import Money
from payments.gateway import PaymentGateway
from subscriptions.domain import (
    EventLimitReachedError,
    Plan,
    PlanNotFoundError,
    Subscription,
    SubscriptionSessionUsedError,
)
from subscriptions.stores import DjangoSubscriptionStore

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, store: DjangoSubscriptionStore, payment_gateway: PaymentGateway) -> None:
        self._store = store
        self._gateway = payment_gateway

    def list_plans(self, plan_type: str | None = None) -> list[Plan]:
        return self._store.list_plans(plan_type)

    def get_active(self, user_id: int) -> Subscription | None:
        return self._store.get_active(user_id)

    def subscribe(self, actor: Actor, plan_id: str, payment_session_id: str) -> Subscription:
        """Activate ``plan_id`` for the caller once its payment session is paid.

        Raises:
            InvalidIdError: If plan_id is not a valid UUID.
            PlanNotFoundError: If the plan does not exist or is inactive.
            ValidationError: If the plan does not match the caller's role or the payment is not confirmed.
            SubscriptionSessionUsedError: If the session already paid for a subscription.
            UpstreamFailureError: If the payment provider cannot be reached.
        """
        plan = self._get_plan(plan_id)
        if actor.role != ADMIN and plan.type != actor.role:
            raise ValidationError(
                code=ErrorCode.INVALID_INPUT,
                message=f"This plan is only available to {plan.type} accounts",
            )
        if self._store.session_used(payment_session_id):
            raise SubscriptionSessionUsedError()
        session = self._gateway.get_session(payment_session_id)
        if not session.is_paid:
            raise ValidationError(
                code=ErrorCode.PAYMENT_NOT_CONFIRMED,
                message="Payment has not been completed for this session",
            )
        start = timezone.now()
        subscription = self._store.activate(actor.user_id, plan, start, start + plan.duration, payment_session_id)
        logger.info("User %s subscribed to plan %s until %s", actor.user_id, plan.id, subscription.end_date)
        return subscription

    def ensure_can_create_event(self, actor: Actor) -> None:
        """Raise EventLimitReachedError when the caller may not publish another event."""
        if actor.is_admin:
            return
        subscription = self._store.get_active(actor.user_id)
        if subscription is None:
            if settings.SUBSCRIPTION_REQUIRED_FOR_EVENTS and actor.role == EVENT_MANAGER:
                raise EventLimitReachedError("An active subscription is required to create events")
            return
        if subscription.events_remaining == 0:
            raise EventLimitReachedError(
                f"Your plan allows {subscription.plan.max_events_allowed} events. Upgrade to create more."
            )

    def record_event_created(self, organizer_id: int) -> None:
        subscription = self._store.get_active(organizer_id)
        if subscription is not None:
            self._store.increment_events_created(subscription.id)

    def record_ticket_sale(self, organizer_id: int, quantity: int, revenue: Money) -> None:
        subscription = self._store.get_active(organizer_id)
        if subscription is None:
            return
        fee = revenue.percentage(subscription.plan.service_fee_percentage)
        self._store.add_ticket_sale(subscription.id, quantity, fee.amount)

    def _get_plan(self, plan_id: str) -> Plan:
        try:
            parsed = UUID(str(plan_id))
        except ValueError:
            raise InvalidIdError("plan")
        plan = self._store.get_plan(parsed)
        if plan is None or not plan.is_active:
            raise PlanNotFoundError()
        return plan
