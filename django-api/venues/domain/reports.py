"""Sales report over venue rentals."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from venues.domain.models import Rental

PAID = "paid"
UNPAID = "unpaid"
REFUNDED = "refunded"
COMPLETED = "completed"
CANCELED = "canceled"

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class VenueBreakdown:
    venue_id: str
    venue_name: str
    bookings: int
    revenue: Decimal


@dataclass(frozen=True)
class PeriodBreakdown:
    period: str
    bookings: int
    revenue: Decimal


@dataclass(frozen=True)
class SalesReport:
    total_revenue: Decimal = Decimal("0.00")
    total_bookings: int = 0
    completed_bookings: int = 0
    canceled_bookings: int = 0
    pending_payments: int = 0
    paid_bookings: int = 0
    refunded_bookings: int = 0
    average_booking_value: Decimal = Decimal("0.00")
    venue_breakdown: tuple[VenueBreakdown, ...] = ()
    time_breakdown: tuple[PeriodBreakdown, ...] = ()
    message: str = ""
    filters: dict = field(default_factory=dict)

    @classmethod
    def empty(cls, message: str, **filters) -> "SalesReport":
        return cls(message=message, filters=filters)

    @classmethod
    def from_rentals(cls, rentals: list[Rental], **filters) -> "SalesReport":
        """Aggregate rentals; revenue counts paid rentals only."""
        paid = [r for r in rentals if r.payment_status == PAID]
        revenue = sum((r.total_price for r in paid), Decimal("0")).quantize(CENTS)
        average = (revenue / len(paid)).quantize(CENTS, rounding=ROUND_HALF_UP) if paid else Decimal("0.00")

        by_venue: dict[str, list[Rental]] = {}
        by_month: dict[str, list[Rental]] = {}
        for rental in rentals:
            by_venue.setdefault(str(rental.venue_id), []).append(rental)
            by_month.setdefault(rental.start_time.strftime("%Y-%m"), []).append(rental)

        return cls(
            total_revenue=revenue,
            total_bookings=len(rentals),
            completed_bookings=sum(1 for r in rentals if r.status == COMPLETED),
            canceled_bookings=sum(1 for r in rentals if r.status == CANCELED),
            pending_payments=sum(1 for r in rentals if r.payment_status == UNPAID),
            paid_bookings=len(paid),
            refunded_bookings=sum(1 for r in rentals if r.payment_status == REFUNDED),
            average_booking_value=average,
            venue_breakdown=tuple(
                VenueBreakdown(
                    venue_id=venue_id,
                    venue_name=group[0].venue_name,
                    bookings=len(group),
                    revenue=_paid_total(group),
                )
                for venue_id, group in by_venue.items()
            ),
            time_breakdown=tuple(
                PeriodBreakdown(period=period, bookings=len(group), revenue=_paid_total(group))
                for period, group in sorted(by_month.items())
            ),
            message="Sales report generated",
            filters=filters,
        )


def _paid_total(rentals: list[Rental]) -> Decimal:
    return sum((r.total_price for r in rentals if r.payment_status == PAID), Decimal("0")).quantize(CENTS)
