from rentals.domain.entities.listing import Listing


class ListingReader:
    async def get_listing(self, listing_id: str) -> Listing | None:
        raise NotImplementedError
