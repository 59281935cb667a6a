from rentals.application.interfaces.identity import Actor, IdentityResolver


class TrustedHeaderIdentityResolver(IdentityResolver):
    """
    Reads the user id that the authenticating gateway in front of this
    service places in a request header. The service must not be reachable
    without passing through that gateway.
    """

    async def resolve(self, credentials: str | None) -> Actor | None:
        if credentials is None:
            return None
        user_id = credentials.strip()
        if not user_id:
            return None
        return Actor(user_id=user_id)
