# app/api/seed.py

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.db.engine import get_engine
from app.db.seed import seed_database

logger = logging.getLogger(__name__)

router = APIRouter(tags=["seed"])


@router.get("/seed", response_class=PlainTextResponse)
def seed() -> PlainTextResponse:
    """
    Create the tables if missing and insert the placeholder data.
    Safe to call repeatedly: existing rows are left untouched.
    """
    try:
        seed_database(get_engine())
    except Exception:
        logger.exception("Error during database seeding")
        return PlainTextResponse("Error seeding database", status_code=500)

    return PlainTextResponse("Database seeded successfully")
