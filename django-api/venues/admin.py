from django.contrib import admin

from venues.models import Cashier, CashierVenue, Rental, Venue


class CashierVenueInline(admin.TabularInline):
    model = CashierVenue
    extra = 0


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = ["name", "owner", "location", "hourly_rate", "daily_rate", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["name", "location"]


@admin.register(Rental)
class RentalAdmin(admin.ModelAdmin):
    list_display = ["venue", "customer_name", "start_time", "end_time", "total_price", "status", "payment_status"]
    list_filter = ["status", "payment_status", "venue"]


@admin.register(Cashier)
class CashierAdmin(admin.ModelAdmin):
    list_display = ["user", "owner", "created_at"]
    inlines = [CashierVenueInline]
