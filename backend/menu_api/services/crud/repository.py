"""
Repository Pattern for database access.

Provides a clean abstraction layer between business logic and data access.
Restaurant-scoped entities additionally get queries filtered by restaurant_id.

Usage:
    from menu_api.services.crud.repository import (
        BaseRepository,
        RestaurantScopedRepository,
    )

    product_repo = RestaurantScopedRepository(Product, db)
    products = product_repo.find_by_restaurant(3, order_by=Product.created_at.desc())
    product = product_repo.find_by_id(42, options=[selectinload(Product.metric)])
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import select, func, exists as sql_exists
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from menu_api.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    Base repository providing common database operations.

    Nothing is committed here; services own the transaction.
    """

    def __init__(self, model: type[ModelT], session: Session):
        self._model = model
        self._session = session

    @property
    def model(self) -> type[ModelT]:
        """The SQLAlchemy model class."""
        return self._model

    @property
    def session(self) -> Session:
        """The database session."""
        return self._session

    def _base_query(self) -> Select:
        """Create base select query."""
        return select(self._model)

    def _apply_options(self, query: Select, options: list[Any] | None) -> Select:
        """Apply eager loading options."""
        if options:
            query = query.options(*options)
        return query

    def _apply_window(
        self,
        query: Select,
        order_by: Any | None,
        limit: int | None,
        offset: int | None,
    ) -> Select:
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)
        if offset is not None:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query

    def find_by_id(
        self,
        entity_id: int,
        *,
        options: list[Any] | None = None,
    ) -> ModelT | None:
        """
        Find entity by primary key.

        Args:
            entity_id: The primary key value.
            options: SQLAlchemy loader options (selectinload, joinedload).

        Returns:
            Entity or None if not found.
        """
        query = self._base_query().where(self._model.id == entity_id)
        query = self._apply_options(query, options)
        return self._session.scalar(query)

    def find_one_by(self, *, options: list[Any] | None = None, **filters: Any) -> ModelT | None:
        """Find the first entity matching equality filters (e.g. slug="pizza-place")."""
        query = self._base_query().filter_by(**filters)
        query = self._apply_options(query, options)
        return self._session.scalars(query.limit(1)).first()

    def find_all(
        self,
        *where: Any,
        options: list[Any] | None = None,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """
        Find all entities matching optional WHERE clauses.

        Args:
            where: SQLAlchemy boolean expressions.
            options: SQLAlchemy loader options.
            limit: Maximum number of results.
            offset: Number of results to skip.
            order_by: Column, expression or list of them.

        Returns:
            Sequence of entities.
        """
        query = self._base_query()
        if where:
            query = query.where(*where)
        query = self._apply_options(query, options)
        query = self._apply_window(query, order_by, limit, offset)
        return self._session.scalars(query).all()

    def exists(self, *where: Any) -> bool:
        """Check whether any row matches the WHERE clauses."""
        query = select(sql_exists().where(*where))
        return self._session.scalar(query) or False


class RestaurantScopedRepository(BaseRepository[ModelT]):
    """
    Repository for entities that carry a restaurant_id column.

    Usage:
        repo = RestaurantScopedRepository(Category, db)
        categories = repo.find_by_restaurant(1, Category.is_active.is_(True))
    """

    def _restaurant_query(self, restaurant_id: int) -> Select:
        """Create restaurant-filtered base query."""
        if not hasattr(self._model, "restaurant_id"):
            raise AttributeError(
                f"Model {self._model.__name__} does not have restaurant_id column. "
                "Use BaseRepository instead."
            )
        return self._base_query().where(self._model.restaurant_id == restaurant_id)

    def find_by_restaurant(
        self,
        restaurant_id: int,
        *where: Any,
        options: list[Any] | None = None,
        limit: int | None = None,
        offset: int | None = None,
        order_by: Any | None = None,
    ) -> Sequence[ModelT]:
        """
        Find all entities of one restaurant.

        Args:
            restaurant_id: Owning restaurant.
            where: Extra boolean expressions.
            options: SQLAlchemy loader options.
            limit: Maximum results.
            offset: Skip count.
            order_by: Order expression(s).
        """
        query = self._restaurant_query(restaurant_id)
        if where:
            query = query.where(*where)
        query = self._apply_options(query, options)
        query = self._apply_window(query, order_by, limit, offset)
        return self._session.scalars(query).all()

    def count_by_restaurant(self, restaurant_id: int, *where: Any) -> int:
        """Count entities of one restaurant."""
        query = (
            select(func.count())
            .select_from(self._model)
            .where(self._model.restaurant_id == restaurant_id)
        )
        if where:
            query = query.where(*where)
        return self._session.scalar(query) or 0
