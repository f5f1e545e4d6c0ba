# ABOUTME: Shared pytest fixtures for building models and save file streams
# ABOUTME: The sample save file is in canonical encoded form

import io

import pytest

from building_manager.building import Building
from building_manager.floor import Floor
from building_manager.room import Room, RoomType
from building_manager.sensors import NoiseSensor, OccupancySensor, TemperatureSensor
from building_manager.timing import TickRegistry

SAMPLE_SAVE_FILE = """General Purpose South
2
1:10.00:10.00:2:101,102
101:STUDY:20.00:1:RuleBased
TemperatureSensor:24,25,26
102:OFFICE:30.00:2:WeightingBased
NoiseSensor:55,62,69:3@40
OccupancySensor:13,24,28:4:30@60
2:10.00:8.00:1
201:LABORATORY:25.00:1
CarbonDioxideSensor:690,740:5:700:150
Forgan Smith Building
1
1:8.50:40.00:0
"""


@pytest.fixture
def sample_save_text():
    """Two buildings covering every sensor type and both evaluators"""
    return SAMPLE_SAVE_FILE


@pytest.fixture
def sample_stream(sample_save_text):
    return io.StringIO(sample_save_text)


@pytest.fixture
def registry():
    return TickRegistry()


@pytest.fixture
def study_room():
    room = Room(101, RoomType.STUDY, 20)
    room.add_sensor(TemperatureSensor([24, 25, 26]))
    return room


@pytest.fixture
def office_room():
    room = Room(102, RoomType.OFFICE, 30)
    room.add_sensor(OccupancySensor([13, 24, 28], 4, 30))
    room.add_sensor(NoiseSensor([55, 62, 69], 3))
    return room


@pytest.fixture
def two_floor_building(study_room, office_room):
    ground = Floor(1, 10, 10)
    ground.add_room(study_room)
    ground.add_room(office_room)
    first = Floor(2, 10, 8)
    first.add_room(Room(201, RoomType.LABORATORY, 25))

    building = Building("General Purpose South")
    building.add_floor(ground)
    building.add_floor(first)
    return building
