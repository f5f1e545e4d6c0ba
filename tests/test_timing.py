# ABOUTME: Tests for the tick registry that drives schedules and sensors
# ABOUTME: Uses mocks to check delivery order and registration bookkeeping

from unittest.mock import Mock

from building_manager.sensors import NoiseSensor


def test_ticks_reach_items_in_registration_order(registry):
    calls = []
    first = Mock()
    first.elapse_one_minute.side_effect = lambda: calls.append("first")
    second = Mock()
    second.elapse_one_minute.side_effect = lambda: calls.append("second")

    registry.register(first)
    registry.register(second)
    registry.elapse_one_minute()

    assert calls == ["first", "second"]
    assert registry.minutes_elapsed == 1


def test_register_is_idempotent(registry):
    item = Mock()
    registry.register(item)
    registry.register(item)
    registry.elapse_minutes(3)

    assert registry.items == [item]
    assert item.elapse_one_minute.call_count == 3


def test_unregister_stops_ticks(registry):
    item = Mock()
    registry.register(item)
    registry.elapse_one_minute()
    registry.unregister(item)
    registry.elapse_one_minute()

    assert item.elapse_one_minute.call_count == 1
    assert registry.items == []
    assert registry.minutes_elapsed == 2


def test_unregister_unknown_item_is_ignored(registry):
    registry.unregister(Mock())
    assert registry.items == []


def test_registered_sensor_moves_through_readings(registry):
    sensor = NoiseSensor([40, 50, 60], 2)
    registry.register(sensor)

    registry.elapse_minutes(2)
    assert sensor.current_reading == 50
    registry.elapse_minutes(4)
    assert sensor.current_reading == 40
