"""Django signals for cache invalidation.

Inventory changes made with queryset ``update()`` bypass these receivers;
the ticket store invalidates explicitly once its transaction commits.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from events.cache import invalidate_event
from events.models import Event, EventAddOn, Speaker, TicketType, Workshop


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    invalidate_event(instance.pk)


@receiver([post_save, post_delete], sender=TicketType)
@receiver([post_save, post_delete], sender=Speaker)
@receiver([post_save, post_delete], sender=Workshop)
@receiver([post_save, post_delete], sender=EventAddOn)
def invalidate_event_child_cache(sender, instance, **kwargs):
    """Invalidate the parent event when one of its associations changes."""
    invalidate_event(instance.event_id)
