# ABOUTME: Tests for the building model's floor stacking rules
# ABOUTME: Covers duplicate, unsupported and oversized floors plus fire drills

import pytest

from building_manager.building import Building
from building_manager.errors import (
    DuplicateFloorError,
    FireDrillError,
    FloorTooSmallError,
    NoFloorBelowError,
)
from building_manager.floor import Floor
from building_manager.room import Room, RoomState, RoomType


def test_first_floor_can_have_any_number():
    building = Building("Annexe")
    building.add_floor(Floor(3, 10, 10))
    building.add_floor(Floor(4, 10, 10))
    assert [f.floor_number for f in building.floors] == [3, 4]


def test_duplicate_floor_is_rejected():
    building = Building("Annexe")
    building.add_floor(Floor(1, 10, 10))
    with pytest.raises(DuplicateFloorError):
        building.add_floor(Floor(1, 10, 10))
    assert len(building.floors) == 1


def test_floor_without_support_is_rejected():
    building = Building("Annexe")
    building.add_floor(Floor(1, 10, 10))
    with pytest.raises(NoFloorBelowError):
        building.add_floor(Floor(3, 10, 10))
    assert len(building.floors) == 1


def test_floor_larger_than_floor_below_is_rejected():
    building = Building("Annexe")
    building.add_floor(Floor(1, 10, 10))
    with pytest.raises(FloorTooSmallError):
        building.add_floor(Floor(2, 10, 10.5))

    # Different shape, same area
    building.add_floor(Floor(2, 20, 5))
    assert building.get_floor_by_number(2).calculate_area() == 100


def test_get_floor_by_number(two_floor_building):
    assert two_floor_building.get_floor_by_number(2).floor_number == 2
    assert two_floor_building.get_floor_by_number(7) is None


def test_fire_drill_needs_floors_and_rooms():
    building = Building("Empty")
    with pytest.raises(FireDrillError):
        building.fire_drill()

    building.add_floor(Floor(1, 10, 10))
    with pytest.raises(FireDrillError):
        building.fire_drill()


def test_fire_drill_evacuates_matching_rooms(two_floor_building):
    two_floor_building.fire_drill(RoomType.STUDY)

    ground = two_floor_building.get_floor_by_number(1)
    assert ground.get_room_by_number(101).evaluate_room_state() == RoomState.EVACUATE
    assert ground.get_room_by_number(102).evaluate_room_state() == RoomState.OPEN

    two_floor_building.cancel_fire_drill()
    assert ground.get_room_by_number(101).evaluate_room_state() == RoomState.OPEN


def test_building_encode(two_floor_building):
    lines = two_floor_building.encode().splitlines()
    assert lines[0] == "General Purpose South"
    assert lines[1] == "2"
    assert lines[2] == "1:10.00:10.00:2"
    assert lines[-2] == "2:10.00:8.00:1"
    assert lines[-1] == "201:LABORATORY:25.00:0"


def test_building_equality():
    a = Building("Annexe")
    b = Building("Annexe")
    a.add_floor(Floor(1, 10, 10))
    assert a != b
    b.add_floor(Floor(1, 10, 10))
    assert a == b

    a.get_floor_by_number(1).add_room(Room(1, RoomType.STUDY, 10))
    assert a != b
