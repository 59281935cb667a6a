from rentals.application.interfaces.listing_reader import ListingReader
from rentals.domain.entities.listing import Listing


class InMemoryListingReader(ListingReader):
    def __init__(self, listings: list[Listing] | None = None) -> None:
        self.listings: dict[str, Listing] = {}
        for listing in listings or []:
            self.add(listing)

    def add(self, listing: Listing) -> None:
        self.listings[listing.id] = listing

    async def get_listing(self, listing_id: str) -> Listing | None:
        return self.listings.get(listing_id)
