"""
Domain services: one per entity family, plus the metrics aggregator.

Every public method returns a ServiceResult envelope.
"""

from .addon_service import AddOnCategoryService, AddOnService
from .category_service import CategoryService
from .metrics_service import MetricsService, compute_conversion_rate
from .product_service import ProductService
from .restaurant_service import RestaurantService
from .settings_service import OpeningHourService, SettingsService
from .user_service import InvalidCredentialsError, UserService
from .variant_service import VariantCategoryService, VariantService

__all__ = [
    "AddOnCategoryService",
    "AddOnService",
    "CategoryService",
    "MetricsService",
    "compute_conversion_rate",
    "ProductService",
    "RestaurantService",
    "OpeningHourService",
    "SettingsService",
    "InvalidCredentialsError",
    "UserService",
    "VariantCategoryService",
    "VariantService",
]
