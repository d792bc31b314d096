"""Identifiers and permission sets for venues, rentals and cashiers."""

from dataclasses import asdict, dataclass, fields
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class VenueId:
    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RentalId:
    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class CashierId:
    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(str(value)))

    def __str__(self) -> str:
        return str(self.value)


def _snake_case(key: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in key)


@dataclass(frozen=True)
class CashierPermissions:
    """Named capabilities delegated to a cashier.

    Field order is significant: legacy records store permissions as a list of
    1-based indices into it.
    """

    can_view_bookings: bool = False
    can_create_bookings: bool = False
    can_cancel_bookings: bool = False
    can_view_reports: bool = False
    can_process_payments: bool = False
    can_manage_customers: bool = False

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def defaults(cls) -> Self:
        return cls(can_view_bookings=True, can_create_bookings=True, can_process_payments=True)

    @classmethod
    def from_storage(cls, raw) -> Self:
        """Read a stored value: a named map, a legacy index list, or nothing."""
        keys = cls.keys()
        if raw is None:
            return cls.defaults()
        if isinstance(raw, list):
            granted = {
                keys[index - 1]
                for index in raw
                if isinstance(index, int) and not isinstance(index, bool) and 1 <= index <= len(keys)
            }
            return cls(**{key: key in granted for key in keys})
        if isinstance(raw, dict):
            normalized = {_snake_case(key): bool(value) for key, value in raw.items()}
            return cls(**{key: normalized.get(key, False) for key in keys})
        raise ValueError(f"Unrecognized cashier permissions format: {type(raw).__name__}")

    @classmethod
    def from_payload(cls, data: dict) -> Self:
        """Build a complete set from request data; omitted keys are revoked.

        Raises:
            ValueError: If a key is unknown or a value is not a boolean.
        """
        keys = cls.keys()
        normalized = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name not in keys:
                raise ValueError(f"Unknown permission: {key}")
            if not isinstance(value, bool):
                raise ValueError(f"Permission {key} must be true or false")
            normalized[name] = value
        return cls(**normalized)

    def to_storage(self) -> dict[str, bool]:
        return asdict(self)

    def granted(self) -> tuple[str, ...]:
        return tuple(key for key, value in asdict(self).items() if value)
