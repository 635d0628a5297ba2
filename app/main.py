import logging

from fastapi import FastAPI

from app.api.invoices import router as invoices_router
from app.api.seed import router as seed_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)

app = FastAPI(
    title="Invoice Dashboard API",
    version="0.1.0",
)

@app.get("/health")
def health_check():
    return {"status": "ok"}

app.include_router(invoices_router)
app.include_router(seed_router)
