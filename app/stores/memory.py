import itertools
from typing import Any, Dict, List, Optional

from app.errors import Conflict
from app.stores.base import Filters, R, Repository


def _matches(record, filters: Optional[Filters]) -> bool:
    if not filters:
        return True
    return all(getattr(record, key, None) == value for key, value in filters.items())


class MemoryRepository(Repository[R]):
    """In-process table keyed by id. Reset on restart."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._rows: Dict[str, R] = {}
        self._ids = itertools.count(1)

    def new_id(self) -> str:
        # Monotonic, skipping ids already taken by seed rows.
        while True:
            candidate = f"{self.id_prefix}-{next(self._ids)}"
            if candidate not in self._rows:
                return candidate

    async def list(self, filters: Optional[Filters] = None) -> List[R]:
        return [row.model_copy(deep=True) for row in self._rows.values() if _matches(row, filters)]

    async def get_by_id(self, record_id: str) -> Optional[R]:
        row = self._rows.get(record_id)
        return row.model_copy(deep=True) if row is not None else None

    async def _insert(self, record: R) -> R:
        if record.id in self._rows:
            raise Conflict(f"{self.label} with this id already exists")
        self._check_unique_now(record)
        self._rows[record.id] = record.model_copy(deep=True)
        return record.model_copy(deep=True)

    async def _update(self, record_id: str, record: R, changes: Dict[str, Any]) -> R:
        self._check_unique_now(record, exclude_id=record_id)
        self._rows[record_id] = record.model_copy(deep=True)
        return record.model_copy(deep=True)

    async def _remove(self, record_id: str) -> Optional[R]:
        return self._rows.pop(record_id, None)

    def _check_unique_now(self, record: R, exclude_id: Optional[str] = None) -> None:
        # Same check as _assert_unique but without yielding, so nothing can
        # slip in between the check and the write.
        for keys in self.unique:
            values = {key: getattr(record, key) for key in keys}
            if any(value is None for value in values.values()):
                continue
            for row in self._rows.values():
                if row.id != exclude_id and _matches(row, values):
                    raise Conflict(f"{self.label} with this {' / '.join(keys)} already exists")
