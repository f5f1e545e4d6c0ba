# ABOUTME: Tests for the room model: sensor uniqueness, ordering and room state
# ABOUTME: Also checks evaluator invalidation and the encoded room block

import pytest

from building_manager.errors import DuplicateSensorError
from building_manager.hazard_evaluation import (
    RuleBasedHazardEvaluator,
    WeightingBasedHazardEvaluator,
)
from building_manager.room import Room, RoomState, RoomType
from building_manager.sensors import (
    CarbonDioxideSensor,
    NoiseSensor,
    OccupancySensor,
    SensorKind,
    TemperatureSensor,
)


def test_room_rejects_invalid_construction():
    with pytest.raises(ValueError):
        Room(1, RoomType.STUDY, 4.99)
    with pytest.raises(ValueError):
        Room(-1, RoomType.STUDY, 10)
    with pytest.raises(ValueError):
        Room(1, "KITCHEN", 10)


def test_sensors_are_sorted_by_tag():
    room = Room(1, RoomType.OFFICE, 20)
    room.add_sensor(TemperatureSensor([20]))
    room.add_sensor(OccupancySensor([1], 1, 5))
    room.add_sensor(CarbonDioxideSensor([700], 1, 700, 100))
    room.add_sensor(NoiseSensor([50], 1))

    assert [s.kind for s in room.sensors] == [
        SensorKind.CARBON_DIOXIDE,
        SensorKind.NOISE,
        SensorKind.OCCUPANCY,
        SensorKind.TEMPERATURE,
    ]


def test_duplicate_sensor_leaves_room_unchanged():
    room = Room(1, RoomType.STUDY, 20)
    original = TemperatureSensor([20])
    room.add_sensor(original)

    with pytest.raises(DuplicateSensorError):
        room.add_sensor(TemperatureSensor([30]))

    assert room.sensors == [original]
    assert room.get_sensor(SensorKind.TEMPERATURE) is original


def test_sensor_list_is_a_copy(study_room):
    study_room.sensors.clear()
    assert len(study_room.sensors) == 1


def test_adding_sensor_clears_hazard_evaluator(study_room):
    study_room.hazard_evaluator = RuleBasedHazardEvaluator(study_room.hazard_sensors())
    study_room.add_sensor(NoiseSensor([50], 1))
    assert study_room.hazard_evaluator is None


def test_room_state_priority():
    """Test fire beats drill, drill beats maintenance, maintenance beats open"""
    room = Room(1, RoomType.STUDY, 20)
    assert room.evaluate_room_state() == RoomState.OPEN

    room.maintenance = True
    assert room.evaluate_room_state() == RoomState.MAINTENANCE

    room.fire_drill = True
    assert room.evaluate_room_state() == RoomState.EVACUATE

    on_fire = Room(2, RoomType.LABORATORY, 20)
    on_fire.add_sensor(TemperatureSensor([70]))
    on_fire.maintenance = True
    assert on_fire.evaluate_room_state() == RoomState.EVACUATE


def test_get_sensor_missing_kind_returns_none(study_room):
    assert study_room.get_sensor(SensorKind.NOISE) is None


def test_encode_without_evaluator(study_room):
    assert study_room.encode() == "101:STUDY:20.00:1\nTemperatureSensor:24,25,26"


def test_encode_with_rule_based_evaluator(study_room):
    study_room.hazard_evaluator = RuleBasedHazardEvaluator(study_room.hazard_sensors())
    assert study_room.encode().splitlines()[0] == "101:STUDY:20.00:1:RuleBased"


def test_encode_aligns_weightings_with_sorted_sensors(office_room):
    occupancy = office_room.get_sensor(SensorKind.OCCUPANCY)
    noise = office_room.get_sensor(SensorKind.NOISE)
    office_room.hazard_evaluator = WeightingBasedHazardEvaluator(
        [(occupancy, 60), (noise, 40)]
    )

    assert office_room.encode().splitlines() == [
        "102:OFFICE:30.00:2:WeightingBased",
        "NoiseSensor:55,62,69:3@40",
        "OccupancySensor:13,24,28:4:30@60",
    ]


def test_room_equality():
    a = Room(1, RoomType.STUDY, 20.0004)
    b = Room(1, RoomType.STUDY, 20)
    assert a == b

    a.add_sensor(NoiseSensor([50], 1))
    assert a != b
    b.add_sensor(NoiseSensor([50], 1))
    assert a == b
    assert Room(1, RoomType.OFFICE, 20) != Room(1, RoomType.STUDY, 20)
