from django.contrib import admin

from subscriptions.models import Subscription, SubscriptionPlan


@admin.register(SubscriptionPlan)
class SubscriptionPlanAdmin(admin.ModelAdmin):
    list_display = ["name", "type", "billing_period", "price", "max_events_allowed", "is_active"]
    list_filter = ["type", "billing_period", "is_active"]


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ["user", "plan", "status", "start_date", "end_date", "events_created", "tickets_sold"]
    list_filter = ["status", "plan"]
