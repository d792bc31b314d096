from django.contrib import admin

from events.models import Event, EventAddOn, Speaker, Ticket, TicketType, Workshop


class TicketTypeInline(admin.TabularInline):
    model = TicketType
    extra = 1


class SpeakerInline(admin.TabularInline):
    model = Speaker
    extra = 0


class WorkshopInline(admin.TabularInline):
    model = Workshop
    extra = 0


class EventAddOnInline(admin.TabularInline):
    model = EventAddOn
    extra = 0


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "category", "location", "start_date", "featured", "tickets_sold"]
    list_filter = ["category", "event_type", "featured"]
    search_fields = ["title", "location"]
    inlines = [TicketTypeInline, SpeakerInline, WorkshopInline, EventAddOnInline]


@admin.register(TicketType)
class TicketTypeAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "price", "quantity", "available_quantity"]
    list_filter = ["event"]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ["order_id", "event", "ticket_type", "user", "quantity", "is_used", "email_sent"]
    list_filter = ["is_used", "email_sent"]
    search_fields = ["order_id", "payment_session_id"]
    readonly_fields = ["qr_code", "attendee_details"]
