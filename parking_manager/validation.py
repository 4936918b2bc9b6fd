"""Field rules per record type.

Each validator takes a write payload and returns the list of field errors;
an empty list means the payload can be persisted.
"""
from typing import List

from parking_manager.config import SQL_INTEGER_MAX
from parking_manager.errors import FieldError
from parking_manager.schemas import ParkingLotWrite, VehicleWrite, ParkingSessionWrite

# field name -> max length
PARKING_LOT_TEXT = {"name": 100, "address": 200}
PARKING_LOT_REQUIRED = ("total_slots", "available_slots", "is_covered", "last_maintenance")
PARKING_LOT_INTEGERS = ("total_slots", "available_slots")

VEHICLE_TEXT = {"plate_number": 10, "owner_name": 100, "model": 50, "type": 20, "color": 20}
VEHICLE_REQUIRED = ("registration_date", "is_active")

PARKING_SESSION_REQUIRED = ("parking_lot_id", "vehicle_id", "start_time", "fee", "is_paid")
PARKING_SESSION_INTEGERS = ("parking_lot_id", "vehicle_id")


def _check_text(payload, field: str, max_length: int) -> List[FieldError]:
    value = getattr(payload, field)
    if value is None or not value.strip():
        return [FieldError(field, f"{field} is required")]
    if len(value) > max_length:
        return [FieldError(field, f"{field} must be at most {max_length} characters")]
    return []


def _check_required(payload, fields) -> List[FieldError]:
    return [FieldError(f, f"{f} is required") for f in fields if getattr(payload, f) is None]


def _check_integer_range(payload, fields) -> List[FieldError]:
    errors = []
    for field in fields:
        value = getattr(payload, field)
        if value is not None and not -SQL_INTEGER_MAX - 1 <= value <= SQL_INTEGER_MAX:
            errors.append(FieldError(field, f"{field} is outside the 64-bit integer range"))
    return errors


def validate_parking_lot(payload: ParkingLotWrite) -> List[FieldError]:
    errors = []
    for field, max_length in PARKING_LOT_TEXT.items():
        errors += _check_text(payload, field, max_length)
    errors += _check_required(payload, PARKING_LOT_REQUIRED)
    errors += _check_integer_range(payload, PARKING_LOT_INTEGERS)
    return errors


def validate_vehicle(payload: VehicleWrite) -> List[FieldError]:
    errors = []
    for field, max_length in VEHICLE_TEXT.items():
        errors += _check_text(payload, field, max_length)
    errors += _check_required(payload, VEHICLE_REQUIRED)
    return errors


def validate_parking_session(payload: ParkingSessionWrite) -> List[FieldError]:
    return _check_required(payload, PARKING_SESSION_REQUIRED) + _check_integer_range(payload, PARKING_SESSION_INTEGERS)
