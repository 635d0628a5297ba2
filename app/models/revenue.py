# app/models/revenue.py

from pydantic import BaseModel, Field


class RevenueRecord(BaseModel):
    month: str = Field(..., max_length=4)
    revenue: int
