from sqlalchemy import Column, Integer, String, Boolean, TIMESTAMP, Numeric, ForeignKey
from parking_manager.database import Base


class ParkingLot(Base):
    __tablename__ = "parking_lots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    address = Column(String(200), nullable=False)
    total_slots = Column(Integer, nullable=False)
    available_slots = Column(Integer, nullable=False)
    is_covered = Column(Boolean, nullable=False)
    last_maintenance = Column(TIMESTAMP(timezone=True), nullable=False)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    plate_number = Column(String(10), nullable=False)
    owner_name = Column(String(100), nullable=False)
    model = Column(String(50), nullable=False)
    type = Column(String(20), nullable=False)
    color = Column(String(20), nullable=False)
    registration_date = Column(TIMESTAMP(timezone=True), nullable=False)
    is_active = Column(Boolean, nullable=False)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


class ParkingSession(Base):
    __tablename__ = "parking_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    parking_lot_id = Column(
        Integer, ForeignKey("parking_lots.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    start_time = Column(TIMESTAMP(timezone=True), nullable=False)
    end_time = Column(TIMESTAMP(timezone=True), nullable=True)
    fee = Column(Numeric(10, 2), nullable=False)
    is_paid = Column(Boolean, nullable=False)
    payment_date = Column(TIMESTAMP(timezone=True), nullable=True)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
