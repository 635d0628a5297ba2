# app/db/schema.py

from sqlalchemy import (
    DDL, event,
    MetaData, Table, Column, Integer, String,
    Date, ForeignKey, Text
)
from sqlalchemy.dialects.postgresql import UUID

metadata = MetaData()

# Native UUID on Postgres, plain string everywhere else
UuidType = String(36).with_variant(UUID(as_uuid=False), "postgresql")

users = Table(
    "users",
    metadata,
    Column("id", UuidType, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("password", Text, nullable=False),
)

customers = Table(
    "customers",
    metadata,
    Column("id", UuidType, primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("image_url", String(255), nullable=False),
)

invoices = Table(
    "invoices",
    metadata,
    Column("id", UuidType, primary_key=True),
    Column("customer_id", UuidType, ForeignKey("customers.id"), nullable=False),
    Column("amount", Integer, nullable=False),
    Column("status", String(255), nullable=False),
    Column("date", Date, nullable=False),
)

revenue = Table(
    "revenue",
    metadata,
    Column("month", String(4), nullable=False, unique=True),
    Column("revenue", Integer, nullable=False),
)


def _uuid_default(table: Table) -> DDL:
    # Postgres only: needs the uuid-ossp extension (SeedingSession.ensure_extensions)
    return DDL(
        f"ALTER TABLE {table.name} ALTER COLUMN id SET DEFAULT uuid_generate_v4()"
    ).execute_if(dialect="postgresql")


UUID_DEFAULTS = {}
for _table in (users, customers, invoices):
    UUID_DEFAULTS[_table.name] = _uuid_default(_table)
    event.listen(_table, "after_create", UUID_DEFAULTS[_table.name])
