from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    """The verified user behind a request."""

    user_id: str


class IdentityResolver:
    """
    Single entry point for turning request credentials into an Actor.

    Every authorization decision (booking, cancelling, confirming, viewing)
    is made against the Actor this returns; there is no second trust path.
    """

    async def resolve(self, credentials: str | None) -> Actor | None:
        raise NotImplementedError
