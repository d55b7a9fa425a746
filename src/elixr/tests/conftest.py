from datetime import datetime

import pytest
from httpx import AsyncClient, ASGITransport

from src.elixr.main import app as fastapi_app
from src.elixr.api.deps import get_delivery_service
from src.elixr.core.settings import Settings
from src.elixr.domain.entities.subscription import Subscription
from src.elixr.services.delivery_service import DeliveryService

# Wednesday afternoon, before the cutoff
FIXED_NOW = datetime(2025, 7, 16, 14, 0)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def delivery_service(settings) -> DeliveryService:
    """
    Service with a frozen clock, tests never read the system time.
    """
    return DeliveryService(settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def app(delivery_service):
    fastapi_app.dependency_overrides[get_delivery_service] = lambda: delivery_service
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def make_subscription():
    def _make(
        plan: str = "daily",
        start_date: datetime = datetime(2025, 7, 1),
        end_date: datetime = datetime(2025, 8, 1),
        **kwargs,
    ) -> Subscription:
        return Subscription(
            id=kwargs.pop("id", "sub-1"),
            plan=plan,
            start_date=start_date,
            end_date=end_date,
            **kwargs,
        )

    return _make
