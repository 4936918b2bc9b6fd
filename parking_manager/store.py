import functools
import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from parking_manager.concurrency import check_version, flush_versioned
from parking_manager.config import SQL_INTEGER_MAX
from parking_manager.errors import NotFound, RecordInUse, StoreUnavailable


def store_call(func):
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (OperationalError, InterfaceError) as e:
            logging.error(f"Record store unavailable: {e}")
            raise StoreUnavailable("The record store is unavailable") from e
    return wrapper


def storable_id(record_id) -> bool:
    # ids outside the signed 64-bit range can never have been assigned
    return -SQL_INTEGER_MAX - 1 <= record_id <= SQL_INTEGER_MAX


class RecordStore:
    """Persistence for one record type. Writes are flushed, never committed."""

    def __init__(self, db: AsyncSession, model, entity: Optional[str] = None):
        self.db = db
        self.model = model
        self.entity = entity or model.__name__

    @store_call
    async def create(self, values: dict):
        record = self.model(**values)
        self.db.add(record)
        await self.db.flush()
        await self.db.refresh(record)
        return record

    @store_call
    async def add_all(self, values_list: Iterable[dict]) -> list:
        records = [self.model(**values) for values in values_list]
        self.db.add_all(records)
        await self.db.flush()
        return records

    @store_call
    async def find(self, record_id: int):
        if not storable_id(record_id):
            return None
        return await self.db.get(self.model, record_id, populate_existing=True)

    async def get(self, record_id: int):
        record = await self.find(record_id)
        if record is None:
            raise NotFound(self.entity, record_id)
        return record

    @store_call
    async def exists(self, record_id: int) -> bool:
        if not storable_id(record_id):
            return False
        found = await self.db.scalar(select(self.model.id).where(self.model.id == record_id))
        return found is not None

    @store_call
    async def get_many(self, ids: Iterable[int]) -> Dict[int, object]:
        ids = {i for i in ids if i is not None and storable_id(i)}
        if not ids:
            return {}
        result = await self.db.execute(select(self.model).where(self.model.id.in_(ids)))
        return {record.id: record for record in result.scalars()}

    @store_call
    async def list(self, offset: int, limit: int) -> List:
        result = await self.db.execute(
            select(self.model).order_by(self.model.id).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    @store_call
    async def fetch(self, statement) -> List:
        result = await self.db.execute(statement)
        return list(result.scalars().all())

    @store_call
    async def update(self, record_id: int, values: dict, expected_version: Optional[int] = None):
        record = await self.get(record_id)
        check_version(self.entity, record, expected_version)

        for key, value in values.items():
            setattr(record, key, value)
        await flush_versioned(self.db, self.model, self.entity, record_id)
        return record

    @store_call
    async def delete(self, record_id: int):
        record = await self.get(record_id)
        await self.db.delete(record)
        try:
            await flush_versioned(self.db, self.model, self.entity, record_id)
        except IntegrityError:
            await self.db.rollback()
            raise RecordInUse(self.entity, record_id)

    @store_call
    async def commit(self):
        await self.db.commit()
