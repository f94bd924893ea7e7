"""
Seed data for development.
Creates a demo owner with one restaurant, its settings, opening hours and a small menu.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from menu_api.models import (
    AddOn,
    AddOnCategory,
    Category,
    OpeningHour,
    Product,
    ProductMetric,
    Restaurant,
    RestaurantSettings,
    User,
    Variant,
    VariantCategory,
)
from shared.config.constants import DayOfWeek
from shared.config.logging import get_logger
from shared.security.password import hash_password

logger = get_logger(__name__)


DEMO_OWNER_EMAIL = "owner@demo.test"
DEMO_OWNER_PASSWORD = "demo1234"
DEMO_RESTAURANT_SLUG = "demo-pizzeria"
DEFAULT_THEME_COLOR = "#f97316"


def _product(restaurant: Restaurant, name: str, price: str, description: str | None = None) -> Product:
    return Product(
        restaurant=restaurant,
        name=name,
        description=description,
        price=Decimal(price),
    )


def seed(db: Session) -> Restaurant | None:
    """
    Create the demo owner and restaurant.
    Idempotent: returns None when the demo restaurant already exists.
    """
    if db.scalar(select(Restaurant.id).where(Restaurant.slug == DEMO_RESTAURANT_SLUG)):
        logger.info("Demo data already seeded, skipping")
        return None

    owner = db.scalar(select(User).where(User.email == DEMO_OWNER_EMAIL))
    if owner is None:
        owner = User(
            name="Demo Owner",
            email=DEMO_OWNER_EMAIL,
            password=hash_password(DEMO_OWNER_PASSWORD),
        )
        db.add(owner)

    settings = RestaurantSettings(
        theme_color=DEFAULT_THEME_COLOR,
        delivery_enabled=True,
        opening_hours=[
            OpeningHour(day_of_week=day, opens_at="12:00", closes_at="23:00", is_open=day != DayOfWeek.MONDAY)
            for day in DayOfWeek.ALL
        ],
    )
    restaurant = Restaurant(
        owner=owner,
        name="Demo Pizzeria",
        slug=DEMO_RESTAURANT_SLUG,
        address="1 Main Street",
        phone="+1 555 0100",
        description="Wood-fired pizza",
        settings=settings,
    )

    margherita = _product(restaurant, "Margherita", "10.00", "Tomato, mozzarella, basil")
    margherita.variant_categories = [
        VariantCategory(
            name="Size",
            variants=[
                Variant(name="Regular", price_modifier=Decimal("0")),
                Variant(name="Large", price_modifier=Decimal("3.00")),
            ],
        )
    ]
    margherita.add_on_categories = [
        AddOnCategory(
            name="Extras",
            max_selections=3,
            add_ons=[
                AddOn(name="Extra cheese", price=Decimal("1.50")),
                AddOn(name="Olives", price=Decimal("1.00")),
            ],
        )
    ]

    restaurant.categories = [
        Category(
            name="Pizzas",
            order_index=0,
            products=[margherita, _product(restaurant, "Pepperoni", "12.00")],
        ),
        Category(
            name="Drinks",
            order_index=1,
            products=[_product(restaurant, "Lemonade", "3.50")],
        ),
    ]

    db.add(restaurant)
    db.flush()

    # Metric rows need the restaurant id
    for product in restaurant.products:
        product.metric = ProductMetric(restaurant_id=restaurant.id)

    db.commit()
    db.refresh(restaurant)
    logger.info("Demo data seeded", restaurant_id=restaurant.id, slug=restaurant.slug)
    return restaurant
