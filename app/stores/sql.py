import logging
from contextlib import nullcontext
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from app.errors import Conflict, TransportError
from app.stores.base import Filters, R, Repository

logger = logging.getLogger(__name__)


class SqlRepository(Repository[R]):
    """
    Table backed by a SQLAlchemy ORM model. One session per operation.

    The ORM calls are blocking, so every operation runs on the threadpool the
    way FastAPI runs a sync endpoint. ``session_lock`` serializes operations
    when all sessions share one connection (in-memory SQLite).
    """

    def __init__(self, *args, orm_model, session_factory, session_lock=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.orm_model = orm_model
        self.SessionLocal = session_factory
        self.session_lock = session_lock

    async def _run(self, fn, *args):
        return await run_in_threadpool(self._locked, fn, *args)

    def _locked(self, fn, *args):
        with self.session_lock or nullcontext():
            return fn(*args)

    def _query(self, db, filters: Optional[Filters]):
        query = db.query(self.orm_model)
        for key, value in (filters or {}).items():
            query = query.filter(getattr(self.orm_model, key) == value)
        return query

    def _to_record(self, row) -> R:
        return self.model.model_validate(row)

    async def list(self, filters: Optional[Filters] = None) -> List[R]:
        return await self._run(self._list_rows, filters)

    def _list_rows(self, filters: Optional[Filters]) -> List[R]:
        db = self.SessionLocal()
        try:
            rows = self._query(db, filters).order_by(self.orm_model.created_at.asc(), self.orm_model.id.asc()).all()
            return [self._to_record(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Error listing %s: %s", self.table, e)
            raise TransportError(f"Failed to load {self.label.lower()} records")
        finally:
            db.close()

    async def get_by_id(self, record_id: str) -> Optional[R]:
        return await self._run(self._get_row, record_id)

    def _get_row(self, record_id: str) -> Optional[R]:
        db = self.SessionLocal()
        try:
            row = db.query(self.orm_model).filter(self.orm_model.id == record_id).first()
            return self._to_record(row) if row else None
        except SQLAlchemyError as e:
            logger.error("Error fetching %s %s: %s", self.table, record_id, e)
            raise TransportError(f"Failed to load {self.label.lower()}")
        finally:
            db.close()

    async def _insert(self, record: R) -> R:
        return await self._run(self._insert_row, record)

    def _insert_row(self, record: R) -> R:
        db = self.SessionLocal()
        try:
            row = self.orm_model(**record.model_dump())
            db.add(row)
            db.commit()
            db.refresh(row)
            return self._to_record(row)
        except IntegrityError as e:
            db.rollback()
            logger.warning("Unique constraint hit on %s: %s", self.table, e.orig)
            raise Conflict(f"{self.label} already exists")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error inserting into %s: %s", self.table, e)
            raise TransportError(f"Failed to save {self.label.lower()}")
        finally:
            db.close()

    async def _update(self, record_id: str, record: R, changes: Dict[str, Any]) -> R:
        return await self._run(self._update_row, record_id, record)

    def _update_row(self, record_id: str, record: R) -> R:
        db = self.SessionLocal()
        try:
            row = db.query(self.orm_model).filter(self.orm_model.id == record_id).first()
            if row is None:
                return record
            for key, value in record.model_dump(exclude={"id", "created_at"}).items():
                setattr(row, key, value)
            db.commit()
            db.refresh(row)
            return self._to_record(row)
        except IntegrityError as e:
            db.rollback()
            logger.warning("Unique constraint hit on %s: %s", self.table, e.orig)
            raise Conflict(f"{self.label} already exists")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error updating %s %s: %s", self.table, record_id, e)
            raise TransportError(f"Failed to update {self.label.lower()}")
        finally:
            db.close()

    async def _remove(self, record_id: str) -> Optional[R]:
        return await self._run(self._remove_row, record_id)

    def _remove_row(self, record_id: str) -> Optional[R]:
        db = self.SessionLocal()
        try:
            row = db.query(self.orm_model).filter(self.orm_model.id == record_id).first()
            if row is None:
                return None
            removed = self._to_record(row)
            db.delete(row)
            db.commit()
            return removed
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Error deleting %s %s: %s", self.table, record_id, e)
            raise TransportError(f"Failed to delete {self.label.lower()}")
        finally:
            db.close()
