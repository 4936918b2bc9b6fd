import pytest
from factories import lot_payload, session_payload, vehicle_payload

from parking_manager.errors import EmptyBatch, ForeignKeyViolation, ValidationError


async def test_empty_batch_is_rejected(lots, sessions):
    with pytest.raises(EmptyBatch):
        await lots.bulk_create([])
    with pytest.raises(EmptyBatch):
        await sessions.bulk_create([])


async def test_valid_batch_is_persisted_with_fresh_ids(lots):
    created = await lots.bulk_create([lot_payload(name=f"Lot {i}") for i in range(4)])

    assert [lot.name for lot in created] == ["Lot 0", "Lot 1", "Lot 2", "Lot 3"]
    assert len({lot.id for lot in created}) == 4
    assert [lot.id for lot in await lots.list()] == [lot.id for lot in created]


async def test_invalid_item_rejects_whole_batch(vehicles):
    batch = [vehicle_payload(plate_number=f"PL{i}") for i in range(3)]
    batch.append(vehicle_payload(owner_name=""))

    with pytest.raises(ValidationError) as info:
        await vehicles.bulk_create(batch)

    assert info.value.index == 3
    assert [e.field for e in info.value.errors] == ["owner_name"]
    assert await vehicles.list() == []


async def test_session_batch_missing_vehicle_persists_nothing(lots, vehicles, sessions):
    lot = await lots.create(lot_payload())
    vehicle = await vehicles.create(vehicle_payload())
    batch = [session_payload(lot.id, vehicle.id) for _ in range(5)]
    batch.append(session_payload(lot.id, None))

    with pytest.raises(ValidationError) as info:
        await sessions.bulk_create(batch)

    assert info.value.index == 5
    assert [e.field for e in info.value.errors] == ["vehicle_id"]
    assert await sessions.list() == []


async def test_session_batch_with_unknown_lot_persists_nothing(lots, vehicles, sessions):
    lot = await lots.create(lot_payload())
    vehicle = await vehicles.create(vehicle_payload())
    batch = [session_payload(lot.id, vehicle.id), session_payload(lot.id + 100, vehicle.id)]

    with pytest.raises(ForeignKeyViolation) as info:
        await sessions.bulk_create(batch)

    assert info.value.index == 1
    assert await sessions.list() == []


async def test_first_invalid_item_is_reported(lots, vehicles, sessions):
    lot = await lots.create(lot_payload())
    vehicle = await vehicles.create(vehicle_payload())
    batch = [
        session_payload(lot.id, vehicle.id),
        session_payload(lot.id, 404),
        session_payload(lot.id, vehicle.id, fee=None),
    ]

    with pytest.raises(ForeignKeyViolation) as info:
        await sessions.bulk_create(batch)

    assert info.value.index == 1


async def test_session_batch_is_returned_with_relations(lots, vehicles, sessions):
    lot = await lots.create(lot_payload())
    vehicle = await vehicles.create(vehicle_payload())

    created = await sessions.bulk_create([session_payload(lot.id, vehicle.id) for _ in range(3)])

    assert len(created) == 3
    assert all(s.parking_lot.id == lot.id for s in created)
    assert len(await sessions.list()) == 3
