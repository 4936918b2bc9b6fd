from typing import Optional

from sqlalchemy import or_, select

from parking_manager.models import ParkingLot, ParkingSession, Vehicle


def _contains(column, term: str):
    # autoescape makes % and _ in the term literal characters
    return column.contains(term, autoescape=True)


def parking_lots_matching(term: Optional[str]):
    statement = select(ParkingLot).order_by(ParkingLot.id)
    if term:
        statement = statement.where(or_(_contains(ParkingLot.name, term), _contains(ParkingLot.address, term)))
    return statement


def vehicles_matching(term: Optional[str]):
    statement = select(Vehicle).order_by(Vehicle.id)
    if term:
        statement = statement.where(_contains(Vehicle.plate_number, term))
    return statement


def parking_sessions_matching(term: Optional[str]):
    statement = select(ParkingSession).order_by(ParkingSession.id)
    if term:
        statement = statement.join(Vehicle, Vehicle.id == ParkingSession.vehicle_id).where(
            _contains(Vehicle.plate_number, term)
        )
    return statement
