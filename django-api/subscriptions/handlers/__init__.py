from subscriptions.handlers.views import MySubscriptionView, PlanListView, SubscribeView

__all__ = ["MySubscriptionView", "PlanListView", "SubscribeView"]
