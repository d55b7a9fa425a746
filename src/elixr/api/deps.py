from src.elixr.core.settings import settings
from src.elixr.services.delivery_service import DeliveryService


# Service factories (composition root)
def get_delivery_service() -> DeliveryService:
    return DeliveryService(settings)
