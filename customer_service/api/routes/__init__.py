from .customers import router as customers_router
from .health import router as health_router
