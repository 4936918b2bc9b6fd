import pytest
from factories import lot_payload

from parking_manager.database import build_engine, build_sessionmaker
from parking_manager.errors import NotFound, StoreUnavailable
from parking_manager.models import ParkingLot
from parking_manager.schemas import record_values
from parking_manager.store import RecordStore


@pytest.fixture
def store(db):
    return RecordStore(db, ParkingLot)


async def test_create_assigns_id_and_version(store):
    record = await store.create(record_values(lot_payload()))

    assert record.id is not None
    assert record.version == 1
    assert await store.exists(record.id)
    assert not await store.exists(record.id + 1)


async def test_list_is_in_insertion_order(store):
    for name in ["B", "A", "C"]:
        await store.create(record_values(lot_payload(name=name)))

    assert [r.name for r in await store.list(0, 10)] == ["B", "A", "C"]
    assert [r.name for r in await store.list(1, 1)] == ["A"]


async def test_get_many_skips_unknown_ids(store):
    first = await store.create(record_values(lot_payload(name="A")))
    second = await store.create(record_values(lot_payload(name="B")))

    found = await store.get_many([first.id, second.id, 99])

    assert set(found) == {first.id, second.id}
    assert await store.get_many([]) == {}


async def test_get_unknown_id(store):
    with pytest.raises(NotFound) as info:
        await store.get(5)
    assert info.value.entity == "ParkingLot"


async def test_unreachable_database(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'parking.db'}")
    async with build_sessionmaker(engine)() as db:
        with pytest.raises(StoreUnavailable):
            await RecordStore(db, ParkingLot).list(0, 10)
    await engine.dispose()
