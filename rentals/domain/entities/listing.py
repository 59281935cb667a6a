"""Listing as seen by the reservation core (owned by the listings service)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Listing:
    id: str
    host_id: str
    nightly_price: int
    active: bool = True
    title: str = ""

    def is_hosted_by(self, user_id: str) -> bool:
        return self.host_id == user_id
