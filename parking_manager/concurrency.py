"""Optimistic concurrency checks for records mapped with a ``version_id_col``."""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from parking_manager.errors import ConcurrencyConflict, NotFound


def check_version(entity: str, record, expected_version: Optional[int]):
    if expected_version is not None and expected_version != record.version:
        raise ConcurrencyConflict(entity, record.id)


async def flush_versioned(db: AsyncSession, model, entity: str, record_id: int):
    try:
        await db.flush()
    except StaleDataError:
        await db.rollback()
        still_there = await db.scalar(select(model.id).where(model.id == record_id))
        if still_there is None:
            raise NotFound(entity, record_id)
        raise ConcurrencyConflict(entity, record_id)
