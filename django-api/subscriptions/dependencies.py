from functools import cache

from payments.dependencies import get_payment_gateway
from subscriptions.services.subscription_service import SubscriptionService
from subscriptions.stores import DjangoSubscriptionStore


@cache
def get_subscription_service() -> SubscriptionService:
    return SubscriptionService(DjangoSubscriptionStore(), get_payment_gateway())
