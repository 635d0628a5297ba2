# app/api/invoices.py

import logging
from typing import List

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import select

from app.db.engine import get_engine
from app.db.schema import invoices, customers
from app.models.invoices import InvoiceAmountOut

logger = logging.getLogger(__name__)

router = APIRouter(tags=["invoices"])

QUERY_AMOUNT = 666


def list_invoices() -> List[InvoiceAmountOut]:
    """
    Invoices whose amount equals QUERY_AMOUNT, with the customer's name.
    """
    engine = get_engine()

    with engine.connect() as conn:
        stmt = (
            select(
                invoices.c.amount,
                customers.c.name,
            )
            .select_from(invoices.join(customers))
            .where(invoices.c.amount == QUERY_AMOUNT)
        )

        rows = conn.execute(stmt).mappings().all()

    return [InvoiceAmountOut(amount=row["amount"], name=row["name"]) for row in rows]


@router.get("/query", response_model=List[InvoiceAmountOut])
def query_invoices():
    try:
        return list_invoices()
    except Exception:
        logger.exception("Error querying the database")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch invoices"})
