# API endpoints and routers

from .auth_endpoints import router as auth_router
from .health_endpoints import router as health_router
from .trips_endpoints import router as trips_router
from .resource_endpoints import router as resource_router
from .meta_endpoints import router as meta_router
from .flight_lookup_endpoints import router as flight_lookup_router

__all__ = [
    "auth_router",
    "health_router",
    "trips_router",
    "resource_router",
    "meta_router",
    "flight_lookup_router",
]
