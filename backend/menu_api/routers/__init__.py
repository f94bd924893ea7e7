"""
HTTP routers. Every router carries its full /api prefix.
"""

from .addons import router as addons_router
from .auth import router as auth_router
from .categories import router as categories_router
from .health import router as health_router
from .metrics import router as metrics_router
from .products import router as products_router
from .restaurants import router as restaurants_router
from .settings import router as settings_router
from .users import router as users_router
from .variants import router as variants_router

all_routers = [
    health_router,
    auth_router,
    users_router,
    restaurants_router,
    settings_router,
    categories_router,
    products_router,
    variants_router,
    addons_router,
    metrics_router,
]

__all__ = ["all_routers"]
