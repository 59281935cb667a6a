"""Value objects of the reservation domain."""

from rentals.domain.value_objects.stay_range import StayRange

__all__ = [
    "StayRange",
]
