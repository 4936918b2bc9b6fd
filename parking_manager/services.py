import logging
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from parking_manager import search
from parking_manager.bulk import ingest
from parking_manager.config import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from parking_manager.errors import FieldError, ForeignKeyViolation, IdMismatch, NotFound, ValidationError
from parking_manager.integrity import ReferenceChecker
from parking_manager.models import ParkingLot, ParkingSession, Vehicle
from parking_manager.pagination import Page, paginate
from parking_manager.schemas import (
    ParkingLotRead,
    ParkingSessionRead,
    VehicleRead,
    record_values,
)
from parking_manager.store import RecordStore
from parking_manager.validation import validate_parking_lot, validate_parking_session, validate_vehicle


def _session_read(record, lot, vehicle) -> ParkingSessionRead:
    return ParkingSessionRead.model_validate(record).model_copy(update={
        "parking_lot": ParkingLotRead.model_validate(lot) if lot else None,
        "vehicle": VehicleRead.model_validate(vehicle) if vehicle else None,
    })


class RecordService:
    model = None
    entity = None
    read_schema = None

    def __init__(self, db: AsyncSession):
        self.db = db
        self.lots = RecordStore(db, ParkingLot, "ParkingLot")
        self.vehicles = RecordStore(db, Vehicle, "Vehicle")
        self.sessions = RecordStore(db, ParkingSession, "ParkingSession")
        self.store = {ParkingLot: self.lots, Vehicle: self.vehicles, ParkingSession: self.sessions}[self.model]
        self.references = ReferenceChecker(self.lots, self.vehicles, self.sessions)

    # hooks for subclasses

    def validate(self, payload) -> List[FieldError]:
        raise NotImplementedError

    def search_statement(self, term: Optional[str]):
        raise NotImplementedError

    async def check_references(self, payload):
        pass

    async def check_unreferenced(self, record_id: int):
        pass

    async def reference_violation(self, payloads: Sequence, batch: bool):
        return None

    async def to_read(self, records: Sequence) -> List:
        return [self.read_schema.model_validate(r) for r in records]

    # operations

    async def list(self, page_number: int = DEFAULT_PAGE_NUMBER, page_size: int = DEFAULT_PAGE_SIZE) -> List:
        records = await paginate(self.store, Page(page_number, page_size))
        return await self.to_read(records)

    async def get(self, record_id: int):
        record = await self.store.get(record_id)
        return (await self.to_read([record]))[0]

    async def search(self, term: Optional[str] = None) -> List:
        records = await self.store.fetch(self.search_statement(term))
        return await self.to_read(records)

    async def create(self, payload):
        self._ensure_valid(payload)
        await self.check_references(payload)

        record = await self._commit(self.store.create(record_values(payload)), [payload])
        logging.info(f"Created {self.entity} {record.id}")
        return (await self.to_read([record]))[0]

    async def update(self, record_id: int, payload):
        if payload.id != record_id:
            logging.warning(f"Rejected {self.entity} update: body id {payload.id} != path id {record_id}")
            raise IdMismatch(record_id, payload.id)
        if not await self.store.exists(record_id):
            raise NotFound(self.entity, record_id)
        self._ensure_valid(payload)
        await self.check_references(payload)

        record = await self._commit(self.store.update(record_id, record_values(payload), payload.version), [payload])
        logging.info(f"Updated {self.entity} {record_id} to version {record.version}")

    async def delete(self, record_id: int):
        await self.check_unreferenced(record_id)
        await self._commit(self.store.delete(record_id))
        logging.info(f"Deleted {self.entity} {record_id}")

    async def bulk_create(self, payloads: Sequence) -> List:
        checker = self.references if self.model is ParkingSession else None
        try:
            records = await self._commit(ingest(self.store, payloads, self.validate, checker), payloads, batch=True)
        except (ValidationError, ForeignKeyViolation) as e:
            logging.warning(f"Rejected {self.entity} batch of {len(payloads)}: {e.message}")
            raise
        logging.info(f"Created {len(records)} {self.entity} records in one batch")
        return await self.to_read(records)

    def _ensure_valid(self, payload):
        errors = self.validate(payload)
        if errors:
            logging.warning(f"Rejected {self.entity} write: {[e.field for e in errors]}")
            raise ValidationError(errors)

    async def _commit(self, write, payloads: Sequence = (), batch: bool = False):
        try:
            result = await write
            await self.store.commit()
        except IntegrityError as e:
            await self.db.rollback()
            violation = await self.reference_violation(payloads, batch)
            if violation is None:
                raise
            raise violation from e
        return result


class ParkingLotService(RecordService):
    model = ParkingLot
    entity = "ParkingLot"
    read_schema = ParkingLotRead

    def validate(self, payload):
        return validate_parking_lot(payload)

    def search_statement(self, term):
        return search.parking_lots_matching(term)

    async def check_unreferenced(self, record_id):
        await self.references.ensure_lot_unreferenced(record_id)


class VehicleService(RecordService):
    model = Vehicle
    entity = "Vehicle"
    read_schema = VehicleRead

    def validate(self, payload):
        return validate_vehicle(payload)

    def search_statement(self, term):
        return search.vehicles_matching(term)

    async def check_unreferenced(self, record_id):
        await self.references.ensure_vehicle_unreferenced(record_id)


class ParkingSessionService(RecordService):
    model = ParkingSession
    entity = "ParkingSession"
    read_schema = ParkingSessionRead

    def validate(self, payload):
        return validate_parking_session(payload)

    def search_statement(self, term):
        return search.parking_sessions_matching(term)

    async def check_references(self, payload):
        await self.references.ensure_session_references(payload)

    async def reference_violation(self, payloads, batch):
        # a lot or vehicle was deleted after the reference check passed
        report = await self.references.missing_references(payloads)
        for index, errors in enumerate(report):
            if errors:
                return ForeignKeyViolation(errors, index if batch else None)
        return None

    async def get_with_relations(self, record_id: int) -> ParkingSessionRead:
        record = await self.store.get(record_id)
        lot = await self.lots.find(record.parking_lot_id)
        vehicle = await self.vehicles.find(record.vehicle_id)
        return _session_read(record, lot, vehicle)

    async def get(self, record_id: int):
        return await self.get_with_relations(record_id)

    async def to_read(self, records):
        lots = await self.lots.get_many(r.parking_lot_id for r in records)
        vehicles = await self.vehicles.get_many(r.vehicle_id for r in records)
        return [
            _session_read(r, lots.get(r.parking_lot_id), vehicles.get(r.vehicle_id))
            for r in records
        ]
