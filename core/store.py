"""Storage port over the Django ORM.

Services read and write through `RecordStore` instead of touching managers
directly so that every database failure is normalized into
`core.errors.StoreError` / `SchemaMissingError` at one boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from django.db import DatabaseError, models, transaction

from core.errors import NotFoundError, StoreError, classify_store_failure
from definitions.models import AnimaDefinition, EnemyDefinition
from player_state.models import Activity, Player, PlayerAnima

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=models.Model)


class RecordStore(Generic[ModelT]):
    """Collection-level CRUD for one model.

    Args:
        model: Django model class backing the collection.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model
        self.collection = model._meta.db_table

    @contextmanager
    def _normalized(self) -> Iterator[None]:
        try:
            yield
        except DatabaseError as exc:
            error = classify_store_failure(exc, collection=self.collection)
            logger.warning(
                "Store failure on %s (%s): %s",
                self.collection,
                type(error).__name__,
                error,
            )
            raise error from exc

    def list(
        self,
        filters: Mapping[str, Any] | None = None,
        order_by: Sequence[str] = (),
        *,
        select_related: Sequence[str] = (),
        lock: bool = False,
        limit: int | None = None,
    ) -> list[ModelT]:
        """Return every record matching `filters`, evaluated eagerly."""

        with self._normalized():
            qs = self.model.objects.filter(**dict(filters or {}))
            if select_related:
                qs = qs.select_related(*select_related)
            if order_by:
                qs = qs.order_by(*order_by)
            if lock:
                qs = qs.select_for_update()
            if limit is not None:
                qs = qs[:limit]
            return list(qs)

    def get(self, pk: Any, **filters: Any) -> ModelT:
        """Return one record by primary key.

        Raises:
            NotFoundError: When no record matches `pk` and `filters`.
        """

        with self._normalized():
            record = self.model.objects.filter(pk=pk, **filters).first()
        if record is None:
            raise NotFoundError(f"{self.model._meta.verbose_name} {pk} not found.")
        return record

    def count(self, filters: Mapping[str, Any] | None = None) -> int:
        """Return the number of records matching `filters`."""

        with self._normalized():
            return self.model.objects.filter(**dict(filters or {})).count()

    def insert(self, **values: Any) -> ModelT:
        """Create and return one record (model `save()` validation applies)."""

        with self._normalized():
            record = self.model(**values)
            record.save()
            return record

    def save(self, record: ModelT) -> ModelT:
        """Persist an already-built record (create or full update)."""

        with self._normalized():
            record.save()
            return record

    def update(self, pk: Any, **values: Any) -> ModelT:
        """Apply a partial update to one record and return the fresh row.

        Raises:
            NotFoundError: When no record has primary key `pk`.
        """

        with self._normalized():
            updated = self.model.objects.filter(pk=pk).update(**values)
            if not updated:
                raise NotFoundError(f"{self.model._meta.verbose_name} {pk} not found.")
            return self.model.objects.get(pk=pk)

    def update_where(self, filters: Mapping[str, Any], **values: Any) -> int:
        """Apply a partial update to every matching record; return the row count."""

        with self._normalized():
            return self.model.objects.filter(**dict(filters)).update(**values)

    def delete(self, pk: Any, **filters: Any) -> None:
        """Delete one record.

        Raises:
            NotFoundError: When no record matches `pk` and `filters`.
        """

        with self._normalized():
            deleted, _ = self.model.objects.filter(pk=pk, **filters).delete()
        if not deleted:
            raise NotFoundError(f"{self.model._meta.verbose_name} {pk} not found.")

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run the enclosed operations in one database transaction."""

        with self._normalized(), transaction.atomic():
            yield


ANIMAS: RecordStore[AnimaDefinition] = RecordStore(AnimaDefinition)
ENEMIES: RecordStore[EnemyDefinition] = RecordStore(EnemyDefinition)
PLAYERS: RecordStore[Player] = RecordStore(Player)
PLAYER_ANIMAS: RecordStore[PlayerAnima] = RecordStore(PlayerAnima)
ACTIVITIES: RecordStore[Activity] = RecordStore(Activity)

__all__ = [
    "ACTIVITIES",
    "ANIMAS",
    "ENEMIES",
    "PLAYERS",
    "PLAYER_ANIMAS",
    "RecordStore",
    "StoreError",
]
