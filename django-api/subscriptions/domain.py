"""Subscription plans, subscriptions and their errors."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from common.errors import ConflictError, ErrorCode, ForbiddenError, NotFoundError

BILLING_PERIOD_DAYS = {"monthly": 30, "yearly": 365}


@dataclass(frozen=True)
class Plan:
    id: UUID
    name: str
    description: str
    type: str
    price: Decimal
    billing_period: str
    max_events_allowed: int
    service_fee_percentage: Decimal
    features: tuple[str, ...]
    is_active: bool

    @property
    def unlimited_events(self) -> bool:
        return self.max_events_allowed == 0

    @property
    def duration(self) -> timedelta:
        return timedelta(days=BILLING_PERIOD_DAYS[self.billing_period])


@dataclass(frozen=True)
class Subscription:
    id: UUID
    user_id: int
    plan: Plan
    status: str
    start_date: datetime
    end_date: datetime
    events_created: int
    tickets_sold: int
    fees_collected: Decimal
    payment_session_id: str | None = None

    @property
    def events_remaining(self) -> int | None:
        """Events left under the plan, or None when unlimited."""
        if self.plan.unlimited_events:
            return None
        return max(0, self.plan.max_events_allowed - self.events_created)


class PlanNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.PLAN_NOT_FOUND, message="Subscription plan not found")


class EventLimitReachedError(ForbiddenError):
    """Raised when an event manager cannot publish another event."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.EVENT_LIMIT_REACHED, message=message)


class SubscriptionSessionUsedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_SESSION_USED,
            message="This payment session has already been used for a subscription",
        )
