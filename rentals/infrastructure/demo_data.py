"""Demo listings shared by the in-memory mode and scripts/seed_db.py."""

from rentals.domain.entities.listing import Listing

# Prices are in the smallest currency unit.
DEMO_LISTINGS = [
    {"id": "lst-bosphorus", "host_id": "host-1", "title": "Bosphorus flat", "nightly_price": 100},
    {"id": "lst-cappadocia", "host_id": "host-1", "title": "Cave house", "nightly_price": 150},
    {"id": "lst-antalya", "host_id": "host-2", "title": "Seaside studio", "nightly_price": 80},
]


def demo_listings() -> list[Listing]:
    return [Listing(**row) for row in DEMO_LISTINGS]
