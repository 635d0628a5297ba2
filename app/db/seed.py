# app/db/seed.py
"""
Create the dashboard tables if missing and insert the placeholder rows.

The whole run happens on one connection inside one transaction. Each row is
inserted under its own SAVEPOINT with ON CONFLICT DO NOTHING, so:
  - rows that already exist are skipped, never overwritten
  - a row that fails is rolled back on its own and logged
  - DDL errors (or anything that is not a DB error) roll back everything
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

import bcrypt
from sqlalchemy import Table, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db.placeholder_data import PLACEHOLDER_DATA, PlaceholderData
from app.db.schema import customers, invoices, revenue, users
from app.models.customers import CustomerRecord
from app.models.invoices import InvoiceRecord
from app.models.revenue import RevenueRecord
from app.models.users import UserRecord

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


@dataclass(frozen=True)
class RowResult:
    key: str
    inserted: bool = False
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class StepSummary:
    table: str
    results: List[RowResult] = field(default_factory=list)

    @property
    def inserted(self) -> int:
        return sum(1 for r in self.results if r.inserted)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.ok and not r.inserted)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)


def hash_password(plaintext: str) -> str:
    hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def insert_or_skip(conn: Connection, table: Table, row: dict, conflict_on: Sequence[str]) -> int:
    """
    INSERT ... ON CONFLICT (conflict_on) DO NOTHING.

    Returns the number of rows written (0 when the row already existed).
    """
    if conn.dialect.name == "postgresql":
        stmt = pg_insert(table)
    else:
        stmt = sqlite_insert(table)

    stmt = stmt.values(**row).on_conflict_do_nothing(index_elements=list(conflict_on))
    return conn.execute(stmt).rowcount


class SeedingSession:
    """One seeding run, bound to a single connection with an open transaction."""

    def __init__(self, conn: Connection):
        self.conn = conn

    def _attempt(self, table: Table, key: str, row: dict, conflict_on: Sequence[str]) -> RowResult:
        try:
            with self.conn.begin_nested():
                written = insert_or_skip(self.conn, table, row, conflict_on)
        except SQLAlchemyError as e:
            logger.error("Error inserting into %s: %s (%s)", table.name, key, e)
            return RowResult(key=key, error=e)
        return RowResult(key=key, inserted=written > 0)

    def _finish(self, table: Table, results: List[RowResult]) -> StepSummary:
        summary = StepSummary(table=table.name, results=results)
        logger.info(
            "Seeded %s: %s inserted, %s skipped, %s failed",
            summary.table,
            summary.inserted,
            summary.skipped,
            summary.failed,
        )
        return summary

    def ensure_extensions(self) -> None:
        if self.conn.dialect.name != "postgresql":
            logger.info("Skipping uuid-ossp extension on %s", self.conn.dialect.name)
            return
        self.conn.execute(text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))

    def seed_users(self, records: Sequence[UserRecord]) -> StepSummary:
        users.create(self.conn, checkfirst=True)

        # bcrypt is the slow part; hash everything up front, in parallel
        with ThreadPoolExecutor() as pool:
            hashed = list(pool.map(hash_password, [u.password for u in records]))

        results = [
            self._attempt(
                users,
                user.email,
                {
                    "id": user.id,
                    "name": user.name,
                    "email": user.email,
                    "password": password,
                },
                ["id"],
            )
            for user, password in zip(records, hashed)
        ]
        return self._finish(users, results)

    def seed_customers(self, records: Sequence[CustomerRecord]) -> StepSummary:
        customers.create(self.conn, checkfirst=True)

        results = [
            self._attempt(
                customers,
                customer.email,
                {
                    "id": customer.id,
                    "name": customer.name,
                    "email": customer.email,
                    "image_url": customer.image_url,
                },
                ["id"],
            )
            for customer in records
        ]
        return self._finish(customers, results)

    def seed_invoices(self, records: Sequence[InvoiceRecord]) -> StepSummary:
        # FK to customers: must run after seed_customers
        invoices.create(self.conn, checkfirst=True)

        results = [
            self._attempt(
                invoices,
                f"customer {invoice.customer_id}",
                {
                    "id": invoice.invoice_id(),
                    "customer_id": invoice.customer_id,
                    "amount": invoice.amount,
                    "status": invoice.status,
                    "date": invoice.date,
                },
                ["id"],
            )
            for invoice in records
        ]
        return self._finish(invoices, results)

    def seed_revenue(self, records: Sequence[RevenueRecord]) -> StepSummary:
        revenue.create(self.conn, checkfirst=True)

        results = [
            self._attempt(
                revenue,
                f"month {rev.month}",
                {"month": rev.month, "revenue": rev.revenue},
                ["month"],
            )
            for rev in records
        ]
        return self._finish(revenue, results)


@contextmanager
def seeding_session(engine: Engine) -> Iterator[SeedingSession]:
    """
    Commit if the block finishes, roll back if anything escapes it.
    The connection is returned to the pool either way.
    """
    with engine.begin() as conn:
        yield SeedingSession(conn)


def seed_database(engine: Engine, data: PlaceholderData = PLACEHOLDER_DATA) -> List[StepSummary]:
    with seeding_session(engine) as session:
        session.ensure_extensions()
        summaries = [
            session.seed_users(data.users),
            session.seed_customers(data.customers),
            session.seed_invoices(data.invoices),
            session.seed_revenue(data.revenue),
        ]

    logger.info("Database seeded (%s tables)", len(summaries))
    return summaries
