"""Value Object StayRange - the nights a guest occupies a listing."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator

from rentals.domain.errors import InvalidDateRangeError


@dataclass(frozen=True)
class StayRange:
    """
    Immutable half-open range of calendar dates ``[check_in, check_out)``.

    The guest sleeps the nights of ``check_in`` up to, but not including,
    ``check_out``; a stay ending on day N and another starting on day N
    share no night.

    Attributes:
        check_in: First night of the stay.
        check_out: Departure day (not occupied).
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_out <= self.check_in:
            raise InvalidDateRangeError(self.check_in, self.check_out)

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def overlaps_with(self, other: "StayRange") -> bool:
        """True when both ranges share at least one night."""
        return self.check_in < other.check_out and other.check_in < self.check_out

    def each_night(self) -> Iterator[date]:
        """Yields every occupied night, check_in first."""
        for offset in range(self.nights):
            yield self.check_in + timedelta(days=offset)

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"
