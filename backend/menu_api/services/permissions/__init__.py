"""
Ownership checks for owner-scoped operations.
"""

from .ownership import (
    AuthorizedChain,
    ChainLink,
    OwnershipResolver,
    add_on_category_link,
    add_on_link,
    category_link,
    product_link,
    settings_link,
    variant_category_link,
    variant_link,
)

__all__ = [
    "AuthorizedChain",
    "ChainLink",
    "OwnershipResolver",
    "add_on_category_link",
    "add_on_link",
    "category_link",
    "product_link",
    "settings_link",
    "variant_category_link",
    "variant_link",
]
