from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

metadata = MetaData()

# Owned by the listings service; the reservation core only reads it and
# locks rows to serialize bookings per listing.
listings = Table(
    "listings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("host_id", String(64), nullable=False),
    Column("title", String(255), nullable=False, default=""),
    Column("nightly_price", Integer, nullable=False),
    Column("active", Boolean, nullable=False, default=True),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("listing_id", String(64), nullable=False),
    Column("guest_user_id", String(64), nullable=False),
    Column("check_in", Date, nullable=False),
    Column("check_out", Date, nullable=False),
    Column("guest_count", Integer, nullable=False),
    Column("total_price", Integer, nullable=False),
    Column("status", String(16), nullable=False),
    Column("provider_payment_id", String(255), unique=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    CheckConstraint("check_out > check_in", name="ck_bookings_stay_not_empty"),
    CheckConstraint("guest_count >= 1", name="ck_bookings_guest_count_positive"),
    Index("ix_bookings_listing_status", "listing_id", "status"),
    Index("ix_bookings_guest", "guest_user_id"),
)

# Exclusion constraint: one row per occupied night of every active booking.
# The unique key rejects any second active booking claiming the same night.
booking_nights = Table(
    "booking_nights",
    metadata,
    Column("listing_id", String(64), nullable=False),
    Column("night", Date, nullable=False),
    Column("booking_id", String(64), ForeignKey("bookings.id"), nullable=False),
    UniqueConstraint("listing_id", "night", name="uq_booking_nights_listing_night"),
    Index("ix_booking_nights_booking", "booking_id"),
)

payment_reviews = Table(
    "payment_reviews",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("provider_payment_id", String(255), nullable=False, unique=True),
    Column("listing_id", String(64), nullable=False),
    Column("guest_user_id", String(64), nullable=False),
    Column("check_in", Date, nullable=False),
    Column("check_out", Date, nullable=False),
    Column("guest_count", Integer, nullable=False),
    Column("total_price", Integer, nullable=False),
    Column("reason", String(500), nullable=False),
    Column("created_at", DateTime(timezone=True)),
)
