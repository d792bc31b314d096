"""Django ORM store for plans and subscriptions."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from subscriptions.domain import Plan, Subscription
from subscriptions.models import Subscription as SubscriptionModel
from subscriptions.models import SubscriptionPlan as PlanModel


def plan_to_domain(row: PlanModel) -> Plan:
    return Plan(
        id=row.id,
        name=row.name,
        description=row.description,
        type=row.type,
        price=row.price,
        billing_period=row.billing_period,
        max_events_allowed=row.max_events_allowed,
        service_fee_percentage=row.service_fee_percentage,
        features=tuple(row.features or ()),
        is_active=row.is_active,
    )


def subscription_to_domain(row: SubscriptionModel) -> Subscription:
    return Subscription(
        id=row.id,
        user_id=row.user_id,
        plan=plan_to_domain(row.plan),
        status=row.status,
        start_date=row.start_date,
        end_date=row.end_date,
        events_created=row.events_created,
        tickets_sold=row.tickets_sold,
        fees_collected=row.fees_collected,
        payment_session_id=row.payment_session_id,
    )


class DjangoSubscriptionStore:
    """Plans and subscriptions. Usage counters only move through ``F()`` updates."""

    def list_plans(self, plan_type: str | None = None) -> list[Plan]:
        qs = PlanModel.objects.filter(is_active=True)
        if plan_type:
            qs = qs.filter(type=plan_type)
        return [plan_to_domain(row) for row in qs]

    def get_plan(self, plan_id: UUID) -> Plan | None:
        row = PlanModel.objects.filter(pk=plan_id).first()
        return plan_to_domain(row) if row else None

    def get_active(self, user_id: int) -> Subscription | None:
        row = (
            SubscriptionModel.objects.select_related("plan")
            .filter(user_id=user_id, status=SubscriptionModel.Status.ACTIVE, end_date__gte=timezone.now())
            .order_by("-start_date")
            .first()
        )
        return subscription_to_domain(row) if row else None

    def session_used(self, payment_session_id: str) -> bool:
        return SubscriptionModel.objects.filter(payment_session_id=payment_session_id).exists()

    def activate(
        self, user_id: int, plan: Plan, start: datetime, end: datetime, payment_session_id: str
    ) -> Subscription:
        """Cancel any active subscription of the user and start a new one."""
        with transaction.atomic():
            SubscriptionModel.objects.filter(user_id=user_id, status=SubscriptionModel.Status.ACTIVE).update(
                status=SubscriptionModel.Status.CANCELLED
            )
            row = SubscriptionModel.objects.create(
                user_id=user_id,
                plan_id=plan.id,
                status=SubscriptionModel.Status.ACTIVE,
                start_date=start,
                end_date=end,
                payment_session_id=payment_session_id,
            )
        return subscription_to_domain(SubscriptionModel.objects.select_related("plan").get(pk=row.pk))

    def increment_events_created(self, subscription_id: UUID) -> None:
        SubscriptionModel.objects.filter(pk=subscription_id).update(events_created=F("events_created") + 1)

    def add_ticket_sale(self, subscription_id: UUID, quantity: int, fee: Decimal) -> None:
        SubscriptionModel.objects.filter(pk=subscription_id).update(
            tickets_sold=F("tickets_sold") + quantity,
            fees_collected=F("fees_collected") + fee,
        )
