"""
Generic async repository.

Uniform persistence contract over any ``AuditMixin`` model. Predicates are
SQLAlchemy column expressions, e.g. ``repo.find(User.role == "Admin")``.

Every write flushes so generated ids, audit fields and constraint
violations surface inside the call; committing is left to the session
owner (``app.db.session.get_db``).
"""

from typing import Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import ColumnElement, Select, exists, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import AuditMixin

T = TypeVar("T", bound=AuditMixin)


class Repository(Generic[T]):
    """
    CRUD + predicate queries for one model class.

    Subclasses set ``model`` and may override ``_select`` to eagerly load
    related entities; every read goes through it.

    Example:
        class DepartmentRepository(Repository[Department]):
            model = Department

            async def get_by_code(self, code: str) -> Optional[Department]:
                return await self.first_or_default(Department.code == code)
    """

    model: Type[T]

    def __init__(self, db: AsyncSession, model: Optional[Type[T]] = None) -> None:
        self._db = db
        if model is not None:
            self.model = model

    def _select(self) -> Select:
        return select(self.model)

    # ─── Read ───────────────────────────────────

    async def get_all(self) -> List[T]:
        result = await self._db.execute(self._select().order_by(self.model.id))
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: int) -> Optional[T]:
        result = await self._db.execute(self._select().where(self.model.id == entity_id))
        return result.scalar_one_or_none()

    async def find(self, *criteria: ColumnElement[bool]) -> List[T]:
        result = await self._db.execute(
            self._select().where(*criteria).order_by(self.model.id)
        )
        return list(result.scalars().all())

    async def first_or_default(self, *criteria: ColumnElement[bool]) -> Optional[T]:
        result = await self._db.execute(
            self._select().where(*criteria).order_by(self.model.id).limit(1)
        )
        return result.scalars().first()

    async def reload(self, entity: T) -> T:
        """Re-read an entity, overwriting loaded state and relationships."""
        result = await self._db.execute(
            self._select()
            .where(self.model.id == entity.id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    # ─── Create ─────────────────────────────────

    async def add(self, entity: T) -> T:
        self._db.add(entity)
        await self._db.flush()
        return entity

    async def add_range(self, entities: Iterable[T]) -> None:
        self._db.add_all(list(entities))
        await self._db.flush()

    # ─── Update ─────────────────────────────────

    async def update(self, entity: T) -> T:
        """Persist changes; ``updated_at`` is stamped by the flush hook."""
        self._db.add(entity)
        await self._db.flush()
        return entity

    async def update_range(self, entities: Iterable[T]) -> None:
        self._db.add_all(list(entities))
        await self._db.flush()

    async def deactivate(self, entity: T) -> T:
        """Soft delete: keep the row, clear the active flag."""
        entity.is_active = False
        return await self.update(entity)

    # ─── Delete (irreversible) ──────────────────

    async def delete(self, entity_id: int) -> bool:
        """Remove by id. Returns False when nothing matched."""
        entity = await self._db.get(self.model, entity_id)
        if entity is None:
            return False
        await self._db.delete(entity)
        await self._db.flush()
        return True

    async def delete_entity(self, entity: T) -> bool:
        """Remove a loaded entity. Returns False for never-persisted objects."""
        if inspect(entity).transient:
            return False
        await self._db.delete(entity)
        await self._db.flush()
        return True

    async def delete_range(self, entities: Iterable[T]) -> None:
        for entity in entities:
            await self._db.delete(entity)
        await self._db.flush()

    # ─── Other ──────────────────────────────────

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        query = select(func.count()).select_from(self.model)
        if criteria:
            query = query.where(*criteria)
        result = await self._db.execute(query)
        return result.scalar() or 0

    async def exists(self, *criteria: ColumnElement[bool]) -> bool:
        result = await self._db.execute(select(exists().where(*criteria)))
        return bool(result.scalar())
