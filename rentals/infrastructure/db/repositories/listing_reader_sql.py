from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.application.interfaces.listing_reader import ListingReader
from rentals.domain.entities.listing import Listing
from rentals.infrastructure.db.tables import listings


class ListingReaderSQL(ListingReader):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_listing(self, listing_id: str) -> Listing | None:
        stmt = select(listings).where(listings.c.id == listing_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return Listing(
            id=row["id"],
            host_id=row["host_id"],
            nightly_price=row["nightly_price"],
            active=bool(row["active"]),
            title=row["title"] or "",
        )
