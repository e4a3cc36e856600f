from sqlalchemy import Column, DateTime, Integer, MetaData, Numeric, String, Table

metadata = MetaData()

bookings = Table(
    "bookings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("hotel_name", String(255), nullable=False),
    Column("checkin", String(64), nullable=False, default="N/A"),
    Column("checkout", String(64), nullable=False, default="N/A"),
    Column("guests", Integer, nullable=False, default=1),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("currency_code", String(3), nullable=False),
    Column("status", String(16), nullable=False, index=True),
    Column("payer_email", String(255)),
    Column("payer_phone", String(32)),
    Column("payment_order_id", String(64)),
    Column("failure_reason", String(64)),
    Column("created_at", DateTime(timezone=True), nullable=False, index=True),
    Column("updated_at", DateTime(timezone=True), nullable=False),
    Column("confirmed_at", DateTime(timezone=True)),
)
