from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Optional


def as_utc(value: datetime) -> datetime:
    # naive timestamps are taken as UTC; SQLite hands stored values back naive
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Write payloads leave every field optional so that missing values are reported
# field by field by parking_manager.validation instead of failing the whole body.

class ParkingLotWrite(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    total_slots: Optional[int] = None
    available_slots: Optional[int] = None
    is_covered: Optional[bool] = None
    last_maintenance: Optional[UtcDatetime] = None


class ParkingLotUpdate(ParkingLotWrite):
    id: Optional[int] = None
    version: Optional[int] = None


class ParkingLotRead(CamelModel):
    id: int
    name: str
    address: str
    total_slots: int
    available_slots: int
    is_covered: bool
    last_maintenance: UtcDatetime
    version: int


class VehicleWrite(CamelModel):
    plate_number: Optional[str] = None
    owner_name: Optional[str] = None
    model: Optional[str] = None
    type: Optional[str] = None
    color: Optional[str] = None
    registration_date: Optional[UtcDatetime] = None
    is_active: Optional[bool] = None


class VehicleUpdate(VehicleWrite):
    id: Optional[int] = None
    version: Optional[int] = None


class VehicleRead(CamelModel):
    id: int
    plate_number: str
    owner_name: str
    model: str
    type: str
    color: str
    registration_date: UtcDatetime
    is_active: bool
    version: int


class ParkingSessionWrite(CamelModel):
    parking_lot_id: Optional[int] = None
    vehicle_id: Optional[int] = None
    start_time: Optional[UtcDatetime] = None
    end_time: Optional[UtcDatetime] = None
    fee: Optional[Decimal] = None
    is_paid: Optional[bool] = None
    payment_date: Optional[UtcDatetime] = None


class ParkingSessionUpdate(ParkingSessionWrite):
    id: Optional[int] = None
    version: Optional[int] = None


class ParkingSessionRead(CamelModel):
    id: int
    parking_lot_id: int
    vehicle_id: int
    start_time: UtcDatetime
    end_time: Optional[UtcDatetime] = None
    fee: Decimal
    is_paid: bool
    payment_date: Optional[UtcDatetime] = None
    version: int
    parking_lot: Optional[ParkingLotRead] = None
    vehicle: Optional[VehicleRead] = None


class FieldErrorResponse(CamelModel):
    field: str
    message: str


class ErrorResponse(CamelModel):
    error: str
    detail: str
    index: Optional[int] = None
    errors: list[FieldErrorResponse] = []


def record_values(payload: CamelModel) -> dict:
    """Column values of a write payload, without the id and version it may carry."""
    return payload.model_dump(exclude={"id", "version"})
