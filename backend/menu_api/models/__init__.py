"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class and TimestampMixin
- user: User
- restaurant: Restaurant, RestaurantSettings, OpeningHour
- catalog: Category, Product
- options: VariantCategory, Variant, AddOnCategory, AddOn
- metrics: ProductMetric
"""

# Base classes
from .base import Base, TimestampMixin

# Accounts
from .user import User

# Restaurant and its configuration
from .restaurant import Restaurant, RestaurantSettings, OpeningHour

# Catalog (menu structure)
from .catalog import Category, Product

# Product options
from .options import VariantCategory, Variant, AddOnCategory, AddOn

# Engagement metrics
from .metrics import ProductMetric

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Restaurant",
    "RestaurantSettings",
    "OpeningHour",
    "Category",
    "Product",
    "VariantCategory",
    "Variant",
    "AddOnCategory",
    "AddOn",
    "ProductMetric",
]
