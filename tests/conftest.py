import pytest
from httpx import ASGITransport, AsyncClient

from parking_manager import config
from parking_manager.database import build_engine, build_sessionmaker, get_db, init_db
from parking_manager.main import app
from parking_manager.services import ParkingLotService, ParkingSessionService, VehicleService


@pytest.fixture
async def engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db(sessionmaker):
    async with sessionmaker() as session:
        yield session


@pytest.fixture
def lots(db):
    return ParkingLotService(db)


@pytest.fixture
def vehicles(db):
    return VehicleService(db)


@pytest.fixture
def sessions(db):
    return ParkingSessionService(db)


@pytest.fixture
async def client(sessionmaker):
    async def override_get_db():
        async with sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        auth=(config.API_USERNAME, config.API_PASSWORD),
    ) as client:
        yield client
    app.dependency_overrides.clear()
