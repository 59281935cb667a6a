"""Booking parameters carried by a payment intent's metadata."""

from datetime import date
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    constr,
    field_validator,
)

from rentals.domain.errors import InvalidWebhookPayloadError


class PaymentMetadata(BaseModel):
    """
    Snapshot of a paid checkout, attached to the provider's payment intent
    when it is created and read back when the payment succeeds.

    Providers store metadata as strings, so every field accepts its string
    form. ``total_price`` is what the guest was charged and is trusted as is.

    Intents are written with snake_case keys; camelCase keys and the older
    ``userId``/``guests`` names are still read so in-flight intents reconcile.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    listing_id: constr(strip_whitespace=True, min_length=1) = Field(
        validation_alias=AliasChoices("listing_id", "listingId")
    )
    guest_user_id: constr(strip_whitespace=True, min_length=1) = Field(
        validation_alias=AliasChoices("guest_user_id", "guestUserId", "userId")
    )
    check_in: date = Field(validation_alias=AliasChoices("check_in", "checkIn"))
    check_out: date = Field(validation_alias=AliasChoices("check_out", "checkOut"))
    guest_count: int = Field(
        ge=1, validation_alias=AliasChoices("guest_count", "guestCount", "guests")
    )
    total_price: int = Field(ge=0, validation_alias=AliasChoices("total_price", "totalPrice"))
    nights: int | None = None
    subtotal: int | None = None
    fee: int | None = None
    currency: str | None = None

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def strip_time_part(cls, value: Any) -> Any:
        # Older intents stored full ISO timestamps; only the calendar day matters.
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @field_validator("check_out")
    @classmethod
    def validate_dates(cls, value: date, info: Any) -> date:
        check_in = info.data.get("check_in")
        if check_in and value <= check_in:
            raise ValueError("check_out must be after check_in")
        return value

    @classmethod
    def parse(
        cls, metadata: dict[str, Any] | None, provider_payment_id: str | None = None
    ) -> "PaymentMetadata":
        if not metadata:
            raise InvalidWebhookPayloadError(
                "Missing payment metadata", provider_payment_id=provider_payment_id
            )
        try:
            return cls.model_validate(metadata)
        except ValidationError as exc:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
            raise InvalidWebhookPayloadError(
                f"Invalid payment metadata: {fields}", provider_payment_id=provider_payment_id
            ) from exc

    def to_provider_metadata(self) -> dict[str, str]:
        return {
            key: value.isoformat() if isinstance(value, date) else str(value)
            for key, value in self.model_dump(exclude_none=True).items()
        }
