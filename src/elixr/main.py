import logging

from fastapi import FastAPI

from src.elixr.api.routers import schedule_router, pricing_router, subscriptions_router
from src.elixr.core.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(
    title="Elixr Delivery Engine",
    version="0.1.0",
    docs_url="/docs",
    redoc_url=None,
)

app.include_router(schedule_router)
app.include_router(pricing_router)
app.include_router(subscriptions_router)

@app.get("/health")
def health():
    return {"status": "ok"}
