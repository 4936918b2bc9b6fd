"""Foreign-key checks between parking sessions and the lots and vehicles they reference."""
from typing import List, Optional, Sequence

from sqlalchemy import select

from parking_manager.errors import FieldError, ForeignKeyViolation, RecordInUse
from parking_manager.models import ParkingSession
from parking_manager.store import RecordStore, storable_id


class ReferenceChecker:
    def __init__(self, lots: RecordStore, vehicles: RecordStore, sessions: RecordStore):
        self.lots = lots
        self.vehicles = vehicles
        self.sessions = sessions

    async def missing_references(self, payloads: Sequence) -> List[List[FieldError]]:
        """Return, for each session payload, the errors for references that do not exist."""
        lots = await self.lots.get_many(p.parking_lot_id for p in payloads if p.parking_lot_id is not None)
        vehicles = await self.vehicles.get_many(p.vehicle_id for p in payloads if p.vehicle_id is not None)

        report = []
        for payload in payloads:
            errors = []
            if payload.parking_lot_id not in lots:
                errors.append(FieldError("parking_lot_id", f"ParkingLot {payload.parking_lot_id} does not exist"))
            if payload.vehicle_id not in vehicles:
                errors.append(FieldError("vehicle_id", f"Vehicle {payload.vehicle_id} does not exist"))
            report.append(errors)
        return report

    async def ensure_session_references(self, payload, index: Optional[int] = None):
        errors = (await self.missing_references([payload]))[0]
        if errors:
            raise ForeignKeyViolation(errors, index)

    async def ensure_unreferenced(self, column, entity: str, record_id: int):
        if not storable_id(record_id):
            return
        statement = select(ParkingSession.id).where(column == record_id).limit(1)
        if await self.sessions.fetch(statement):
            raise RecordInUse(entity, record_id)

    async def ensure_lot_unreferenced(self, lot_id: int):
        await self.ensure_unreferenced(ParkingSession.parking_lot_id, "ParkingLot", lot_id)

    async def ensure_vehicle_unreferenced(self, vehicle_id: int):
        await self.ensure_unreferenced(ParkingSession.vehicle_id, "Vehicle", vehicle_id)
