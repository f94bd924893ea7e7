"""
Pydantic schemas for the menu API.
Centralized to avoid circular imports between services and routers.

Create schemas leave required fields optional so services can report every
missing field in one ValidationError instead of a framework 422.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from shared.config.constants import Limits, TIME_PATTERN
from shared.utils.schemas import UserView
from shared.utils.validators import validate_image_url


def _image_url(value: Optional[str]) -> Optional[str]:
    return validate_image_url(value)


# =============================================================================
# Opening Hour Schemas
# =============================================================================


class OpeningHourOutput(BaseModel):
    id: int
    settings_id: int
    day_of_week: int
    opens_at: str
    closes_at: str
    is_open: bool

    class Config:
        from_attributes = True


class OpeningHourCreate(BaseModel):
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    opens_at: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    closes_at: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    is_open: bool = True


class OpeningHourUpdate(BaseModel):
    opens_at: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    closes_at: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    is_open: Optional[bool] = None


# =============================================================================
# Settings Schemas
# =============================================================================


class SettingsOutput(BaseModel):
    id: int
    restaurant_id: int
    currency: str
    theme_color: str | None = None
    whatsapp_number: str | None = None
    accepts_orders: bool
    delivery_enabled: bool
    pickup_enabled: bool
    show_prices: bool
    opening_hours: list[OpeningHourOutput] = []

    class Config:
        from_attributes = True


class SettingsUpdate(BaseModel):
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    theme_color: Optional[str] = None
    whatsapp_number: Optional[str] = None
    accepts_orders: Optional[bool] = None
    delivery_enabled: Optional[bool] = None
    pickup_enabled: Optional[bool] = None
    show_prices: Optional[bool] = None


# =============================================================================
# Variant Schemas
# =============================================================================


class VariantOutput(BaseModel):
    id: int
    variant_category_id: int
    name: str
    price_modifier: float
    is_active: bool

    class Config:
        from_attributes = True


class VariantCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    price_modifier: float = 0
    is_active: bool = True


class VariantUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    price_modifier: Optional[float] = None
    is_active: Optional[bool] = None


class VariantCategoryOutput(BaseModel):
    id: int
    product_id: int
    name: str
    order_index: int
    is_active: bool
    variants: list[VariantOutput] = []

    class Config:
        from_attributes = True


class VariantCategoryCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    order_index: int = Field(
        default=0, ge=-Limits.MAX_DB_SMALL_INTEGER, le=Limits.MAX_DB_SMALL_INTEGER
    )
    is_active: bool = True


class VariantCategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    order_index: Optional[int] = Field(
        default=None, ge=-Limits.MAX_DB_SMALL_INTEGER, le=Limits.MAX_DB_SMALL_INTEGER
    )
    is_active: Optional[bool] = None


# =============================================================================
# Add-on Schemas
# =============================================================================


class AddOnOutput(BaseModel):
    id: int
    add_on_category_id: int
    name: str
    price: float
    is_active: bool

    class Config:
        from_attributes = True


class AddOnCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    price: float = Field(default=0, ge=Limits.MIN_PRICE, le=Limits.MAX_PRICE)
    is_active: bool = True


class AddOnUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    price: Optional[float] = Field(default=None, ge=Limits.MIN_PRICE, le=Limits.MAX_PRICE)
    is_active: Optional[bool] = None


class AddOnCategoryOutput(BaseModel):
    id: int
    product_id: int
    name: str
    min_selections: int
    max_selections: int
    is_required: bool
    order_index: int
    is_active: bool
    add_ons: list[AddOnOutput] = []

    class Config:
        from_attributes = True


class AddOnCategoryCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    min_selections: int = Field(default=0, ge=0, le=Limits.MAX_DB_SMALL_INTEGER)
    max_selections: int = Field(default=0, ge=0, le=Limits.MAX_DB_SMALL_INTEGER)
    is_required: bool = False
    order_index: int = Field(
        default=0, ge=-Limits.MAX_DB_SMALL_INTEGER, le=Limits.MAX_DB_SMALL_INTEGER
    )
    is_active: bool = True


class AddOnCategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    min_selections: Optional[int] = Field(default=None, ge=0, le=Limits.MAX_DB_SMALL_INTEGER)
    max_selections: Optional[int] = Field(default=None, ge=0, le=Limits.MAX_DB_SMALL_INTEGER)
    is_required: Optional[bool] = None
    order_index: Optional[int] = Field(
        default=None, ge=-Limits.MAX_DB_SMALL_INTEGER, le=Limits.MAX_DB_SMALL_INTEGER
    )
    is_active: Optional[bool] = None


# =============================================================================
# Metrics Schemas
# =============================================================================


class ProductMetricOutput(BaseModel):
    id: int
    product_id: int
    restaurant_id: int
    views: int
    added_to_cart: int
    conversion_rate: float
    last_viewed_at: datetime | None = None
    last_added_at: datetime | None = None

    class Config:
        from_attributes = True


class ProductSummary(BaseModel):
    id: int
    name: str
    price: float
    image_url: str | None = None
    is_available: bool

    class Config:
        from_attributes = True


class ProductMetricWithProduct(ProductMetricOutput):
    product: ProductSummary


class ConversionRateOutput(BaseModel):
    product_id: int
    conversion_rate: float


class MetricsOverview(BaseModel):
    total_views: int
    total_added_to_cart: int
    average_conversion_rate: float
    top_product: ProductMetricWithProduct | None = None
    total_products: int


# =============================================================================
# Product Schemas
# =============================================================================


class ProductOutput(BaseModel):
    id: int
    restaurant_id: int
    category_id: int
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None
    is_available: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class ProductDetailOutput(ProductOutput):
    """Product with options and engagement counters."""

    variant_categories: list[VariantCategoryOutput] = []
    add_on_categories: list[AddOnCategoryOutput] = []
    metric: ProductMetricOutput | None = None


class ProductCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: Optional[float] = Field(default=None, ge=Limits.MIN_PRICE, le=Limits.MAX_PRICE)
    image_url: Optional[str] = None
    is_available: bool = True

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: Optional[str]) -> Optional[str]:
        return _image_url(value)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    price: Optional[float] = Field(default=None, ge=Limits.MIN_PRICE, le=Limits.MAX_PRICE)
    image_url: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: Optional[str]) -> Optional[str]:
        return _image_url(value)


# =============================================================================
# Category Schemas
# =============================================================================


class CategoryOutput(BaseModel):
    id: int
    restaurant_id: int
    name: str
    description: str | None = None
    order_index: int
    is_active: bool

    class Config:
        from_attributes = True


class CategoryWithProducts(CategoryOutput):
    products: list[ProductOutput] = []


class CategoryWithStats(CategoryOutput):
    product_count: int
    total_views: int


class CategoryCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    order_index: int = Field(
        default=0, ge=-Limits.MAX_DB_SMALL_INTEGER, le=Limits.MAX_DB_SMALL_INTEGER
    )
    is_active: bool = True


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    order_index: Optional[int] = Field(
        default=None, ge=-Limits.MAX_DB_SMALL_INTEGER, le=Limits.MAX_DB_SMALL_INTEGER
    )
    is_active: Optional[bool] = None


# =============================================================================
# Restaurant Schemas
# =============================================================================


class RestaurantOutput(BaseModel):
    id: int
    user_id: int
    name: str
    slug: str
    address: str
    phone: str
    description: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    is_active: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class RestaurantWithSettings(RestaurantOutput):
    settings: SettingsOutput | None = None


class RestaurantDetail(RestaurantWithSettings):
    """Public restaurant page: settings, opening hours and active categories."""

    categories: list[CategoryOutput] = []
    owner: UserView | None = None


class RestaurantSummary(RestaurantWithSettings):
    """Owner dashboard row."""

    category_count: int
    product_count: int


class RestaurantCreate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    slug: Optional[str] = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None

    @field_validator("logo_url", "banner_url")
    @classmethod
    def _check_urls(cls, value: Optional[str]) -> Optional[str]:
        return _image_url(value)


class RestaurantUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    slug: Optional[str] = Field(default=None, max_length=Limits.MAX_SLUG_LENGTH)
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    logo_url: Optional[str] = None
    logo_path: Optional[str] = None
    banner_url: Optional[str] = None
    banner_path: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("logo_url", "banner_url")
    @classmethod
    def _check_urls(cls, value: Optional[str]) -> Optional[str]:
        return _image_url(value)
