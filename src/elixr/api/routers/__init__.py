from src.elixr.api.routers.schedule import router as schedule_router
from src.elixr.api.routers.pricing import router as pricing_router
from src.elixr.api.routers.subscriptions import router as subscriptions_router

__all__ = ["schedule_router", "pricing_router", "subscriptions_router"]
