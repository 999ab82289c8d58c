"""
Repository contract shared by every backing store.

A repository owns one table of records of one pydantic model. Reads hand out
copies, inserts assign ids and timestamps, updates refresh ``updated_at``,
removes are hard deletes, and uniqueness constraints are checked here, at the
store boundary, before anything is written.
"""

import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from app.errors import Conflict, NotFound, ValidationError
from app.stores.feed import Change, ChangeFeed

R = TypeVar("R", bound=BaseModel)

Filters = Dict[str, Any]

# Never overwritten by update().
IMMUTABLE_FIELDS = ("id", "created_at")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Repository(ABC, Generic[R]):
    def __init__(
        self,
        table: str,
        model: Type[R],
        id_prefix: str,
        label: str,
        unique: Sequence[Tuple[str, ...]] = (),
        feed: Optional[ChangeFeed] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.table = table
        self.model = model
        self.id_prefix = id_prefix
        self.label = label
        self.unique = tuple(tuple(keys) for keys in unique)
        self.feed = feed
        self.clock = clock

    # -- reads -------------------------------------------------------------

    @abstractmethod
    async def list(self, filters: Optional[Filters] = None) -> List[R]:
        ...

    @abstractmethod
    async def get_by_id(self, record_id: str) -> Optional[R]:
        ...

    async def find_one(self, filters: Filters) -> Optional[R]:
        rows = await self.list(filters)
        return rows[0] if rows else None

    async def get_by_slug(self, slug: str) -> Optional[R]:
        return await self.find_one({"slug": slug})

    async def count(self, filters: Optional[Filters] = None) -> int:
        return len(await self.list(filters))

    # -- writes ------------------------------------------------------------

    async def insert(self, record: R) -> R:
        record = self._stamp_new(record)
        await self._assert_unique(record)
        saved = await self._insert(record)
        self._publish("insert", saved)
        return saved

    async def update(self, record_id: str, partial: Dict[str, Any]) -> R:
        current = await self.get_by_id(record_id)
        if current is None:
            raise NotFound(f"{self.label} not found")
        changes = {k: v for k, v in partial.items() if k not in IMMUTABLE_FIELDS}
        try:
            candidate = self.model.model_validate({**current.model_dump(), **changes})
        except SchemaError as e:
            raise ValidationError(f"Invalid {self.label.lower()} update: {e.errors()[0]['msg']}")
        if "updated_at" in self.model.model_fields:
            candidate.updated_at = self._next_updated_at(current.updated_at)
            changes["updated_at"] = candidate.updated_at
        await self._assert_unique(candidate, exclude_id=record_id)
        saved = await self._update(record_id, candidate, changes)
        self._publish("update", saved)
        return saved

    async def remove(self, record_id: str) -> R:
        removed = await self._remove(record_id)
        if removed is None:
            raise NotFound(f"{self.label} not found")
        self._publish("delete", removed)
        return removed

    @abstractmethod
    async def _insert(self, record: R) -> R:
        ...

    @abstractmethod
    async def _update(self, record_id: str, record: R, changes: Dict[str, Any]) -> R:
        ...

    @abstractmethod
    async def _remove(self, record_id: str) -> Optional[R]:
        ...

    async def load(self, records: Sequence[R]) -> None:
        """Bulk-load seed rows as-is, keeping their ids and timestamps."""
        for record in records:
            await self._assert_unique(record)
            await self._insert(record.model_copy(deep=True))

    async def close(self) -> None:
        return None

    # -- helpers -----------------------------------------------------------

    def new_id(self) -> str:
        return f"{self.id_prefix}-{uuid.uuid4().hex[:16]}"

    def _stamp_new(self, record: R) -> R:
        record = record.model_copy(deep=True)
        now = self.clock()
        record.id = self.new_id()
        record.created_at = now
        if "updated_at" in self.model.model_fields:
            record.updated_at = now
        return record

    def _next_updated_at(self, previous: Optional[datetime]) -> datetime:
        now = self.clock()
        if previous is not None and now <= previous:
            return previous + timedelta(microseconds=1)
        return now

    async def _assert_unique(self, record: R, exclude_id: Optional[str] = None) -> None:
        for keys in self.unique:
            values = {key: getattr(record, key) for key in keys}
            if any(value is None for value in values.values()):
                continue
            existing = await self.find_one(values)
            if existing is not None and existing.id != exclude_id:
                raise Conflict(f"{self.label} with this {' / '.join(keys)} already exists")

    def _publish(self, event: str, record: R) -> None:
        if self.feed is not None:
            self.feed.publish(Change(table=self.table, event=event, record=record.model_copy(deep=True)))
