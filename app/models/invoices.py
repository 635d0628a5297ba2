# app/models/invoices.py

import uuid
import datetime
from typing import Optional

from pydantic import BaseModel

# Fixed namespace so the same placeholder invoice always gets the same id
INVOICE_NAMESPACE = uuid.UUID("9a4e0e0b-3c1f-4c55-8f3a-6b1d2c7e5a10")


class InvoiceAmountOut(BaseModel):
    amount: int
    name: str


class InvoiceRecord(BaseModel):
    customer_id: str
    amount: int
    status: str
    date: datetime.date
    id: Optional[str] = None

    def invoice_id(self) -> str:
        """
        Explicit id if given, otherwise one derived from the invoice contents.
        """
        if self.id is not None:
            return self.id
        key = f"{self.customer_id}|{self.amount}|{self.status}|{self.date.isoformat()}"
        return str(uuid.uuid5(INVOICE_NAMESPACE, key))
