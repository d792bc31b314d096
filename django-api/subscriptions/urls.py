from django.urls import path

from subscriptions.handlers import MySubscriptionView, PlanListView, SubscribeView

urlpatterns = [
    path("subscriptions", SubscribeView.as_view(), name="subscription-create"),
    path("subscriptions/plans", PlanListView.as_view(), name="subscription-plans"),
    path("subscriptions/me", MySubscriptionView.as_view(), name="subscription-me"),
]
