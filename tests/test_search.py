from factories import lot_payload, session_payload, vehicle_payload


async def test_lot_search_matches_name(lots):
    await lots.create(lot_payload(name="Central Plaza", address="1 Main Street"))
    await lots.create(lot_payload(name="East Side", address="9 River Road"))

    found = await lots.search("Plaza")

    assert [lot.name for lot in found] == ["Central Plaza"]


async def test_lot_search_matches_address(lots):
    await lots.create(lot_payload(name="Central Plaza", address="1 Main Street"))
    await lots.create(lot_payload(name="East Side", address="9 River Road"))

    assert [lot.name for lot in await lots.search("River")] == ["East Side"]


async def test_empty_term_matches_everything(lots):
    await lots.create(lot_payload(name="Central Plaza"))
    await lots.create(lot_payload(name="East Side"))

    assert len(await lots.search("")) == 2
    assert len(await lots.search(None)) == 2


async def test_search_is_case_sensitive(lots):
    await lots.create(lot_payload(name="Central Plaza"))

    assert await lots.search("plaza") == []
    assert len(await lots.search("Plaza")) == 1


async def test_wildcards_are_literal(lots):
    await lots.create(lot_payload(name="Central Plaza"))
    await lots.create(lot_payload(name="100% Covered"))

    assert [lot.name for lot in await lots.search("%")] == ["100% Covered"]
    assert await lots.search("_") == []


async def test_search_is_not_paginated(lots):
    for i in range(15):
        await lots.create(lot_payload(name=f"Garage {i}"))

    assert len(await lots.search("Garage")) == 15


async def test_session_search_by_vehicle_plate(lots, vehicles, sessions):
    lot = await lots.create(lot_payload())
    first = await vehicles.create(vehicle_payload(plate_number="CA1234AB"))
    second = await vehicles.create(vehicle_payload(plate_number="PB9876KK"))
    await sessions.create(session_payload(lot.id, first.id))
    await sessions.create(session_payload(lot.id, second.id))
    await sessions.create(session_payload(lot.id, second.id))

    found = await sessions.search("9876")

    assert len(found) == 2
    assert {s.vehicle.plate_number for s in found} == {"PB9876KK"}
    assert await sessions.search("pb98") == []
    assert len(await sessions.search("")) == 3


async def test_vehicle_search_by_plate(vehicles):
    await vehicles.create(vehicle_payload(plate_number="CA1234AB"))
    await vehicles.create(vehicle_payload(plate_number="PB9876KK"))

    assert [v.plate_number for v in await vehicles.search("CA")] == ["CA1234AB"]
