"""
Base Service Classes.

Provides base classes for application services that:
- Use Repository for data access
- Delegate ownership checks to OwnershipResolver
- Convert entities to output schemas
- Return ServiceResult envelopes (via @service_operation on public methods)

Architecture:
    Router (thin) → Service (business logic) → Resolver (guard) → Repository → Model

Usage:
    from menu_api.services.base_service import BaseCRUDService

    class CategoryService(BaseCRUDService[Category, CategoryOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=Category,
                output_schema=CategoryOutput,
                entity_name="Category",
                required_fields=("name",),
                toggle_field="is_active",
            )
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menu_api.models import Base
from menu_api.services.crud.repository import BaseRepository, RestaurantScopedRepository
from menu_api.services.permissions import OwnershipResolver
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import ValidationError
from shared.utils.validators import sanitize_text

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


def violates_unique(exc: IntegrityError, constraint: str, *columns: str) -> bool:
    """
    True when exc is a uniqueness violation of the named constraint.

    PostgreSQL reports the constraint name. SQLite only reports
    "UNIQUE constraint failed: <table>.<column>, ...", so the columns are matched instead.
    """
    diag = getattr(exc.orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name == constraint

    message = str(exc.orig)
    if constraint in message:
        return True
    if not message.startswith("UNIQUE constraint failed:"):
        return False
    failed = {part.strip().rsplit(".", 1)[-1] for part in message.split(":", 1)[1].split(",")}
    return failed == set(columns)


class BaseService:
    """
    Base service holding the session and the ownership resolver.

    Public methods are wrapped with @service_operation, which reads ``self.db``.
    """

    def __init__(self, db: Session):
        self._db = db
        self._resolver = OwnershipResolver(db)

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def resolver(self) -> OwnershipResolver:
        """Ownership chain guard."""
        return self._resolver

    def _commit(self) -> None:
        safe_commit(self._db)


class BaseCRUDService(BaseService, Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD and toggle operations.

    Responsibilities:
    - Required-field validation (all missing fields reported together)
    - PATCH-style partial merge on update
    - Hard delete (children follow ORM and ON DELETE cascades)
    - Single-field boolean toggle
    - Mapping store uniqueness violations to domain conflicts (_on_integrity_error)
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        required_fields: Iterable[str] = (),
        toggle_field: str | None = None,
        text_fields: Iterable[str] = ("name", "description"),
    ):
        super().__init__(db)
        self._model = model
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._required_fields = tuple(required_fields)
        self._toggle_field = toggle_field
        self._text_fields = set(text_fields)

        if hasattr(model, "restaurant_id"):
            self._repo: BaseRepository[ModelT] = RestaurantScopedRepository(model, db)
        else:
            self._repo = BaseRepository(model, db)

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Write helpers (called by subclasses after authorization)
    # =========================================================================

    def _require(self, data: dict[str, Any], fields: Iterable[str] | None = None) -> None:
        """
        Raise ValidationError naming every required field that is absent or blank.
        """
        names = self._required_fields if fields is None else tuple(fields)
        missing = [
            name for name in names
            if data.get(name) is None or (isinstance(data.get(name), str) and not data[name].strip())
        ]
        if missing:
            raise ValidationError.missing_fields(missing)

    def _clean(self, data: dict[str, Any]) -> dict[str, Any]:
        """Sanitize free-text fields."""
        for field_name in self._text_fields:
            if isinstance(data.get(field_name), str):
                data[field_name] = sanitize_text(data[field_name])
        return data

    def _insert(self, entity: ModelT) -> ModelT:
        """
        Persist a new entity in one transaction.

        Rows attached through relationships (restaurant.settings, product.metric)
        are flushed in the same transaction.
        """
        self._db.add(entity)
        try:
            self._db.flush()
            self._commit()
        except IntegrityError as exc:
            self._db.rollback()
            self._on_integrity_error(exc)
            raise
        self._db.refresh(entity)
        logger.info(f"{self._entity_name} created", entity_id=entity.id)
        return entity

    def _apply_update(self, entity: ModelT, data: dict[str, Any]) -> ModelT:
        """
        Merge provided fields into the entity and commit (PATCH semantics).

        Only keys present in data are written; callers pass
        ``model_dump(exclude_unset=True)`` so omitted fields stay untouched.
        """
        columns = self._model.__table__.columns
        # An explicit null is only written to nullable columns
        data = self._clean({
            k: v for k, v in data.items()
            if v is not None or (k in columns and columns[k].nullable)
        })
        self._validate_update(entity, data)

        for field_name, value in data.items():
            if hasattr(entity, field_name):
                setattr(entity, field_name, value)

        try:
            self._commit()
        except IntegrityError as exc:
            self._on_integrity_error(exc)
            raise
        self._db.refresh(entity)
        logger.info(f"{self._entity_name} updated", entity_id=entity.id, fields=sorted(data))
        return entity

    def _delete(self, entity: ModelT) -> None:
        """Hard delete; owned children go with it."""
        entity_id = entity.id
        self._db.delete(entity)
        self._commit()
        logger.info(f"{self._entity_name} deleted", entity_id=entity_id)

    def _toggle(self, entity: ModelT) -> ModelT:
        """Flip the configured boolean field."""
        if self._toggle_field is None:
            raise TypeError(f"{type(self).__name__} has no toggle field")
        current = getattr(entity, self._toggle_field)
        setattr(entity, self._toggle_field, not current)
        self._commit()
        self._db.refresh(entity)
        logger.info(
            f"{self._entity_name} toggled",
            entity_id=entity.id,
            field=self._toggle_field,
            value=not current,
        )
        return entity

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        """Validate data before update. Override to add rules."""
        pass

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        """Translate a uniqueness violation into a domain error. Default: re-raise as is."""
        pass
