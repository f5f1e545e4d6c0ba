# ABOUTME: Builds concrete sensors from a save file tag and positional fields
# ABOUTME: Enforces per-variant field counts and value constraints

from typing import Dict, List

from building_manager.errors import FileFormatError
from building_manager.numeric import parse_int, parse_int_list
from building_manager.sensors import SENSOR_CLASSES, SensorKind, TimedSensor

# Fields after the tag and readings, e.g. frequency, capacity
VARIANT_FIELD_COUNTS: Dict[SensorKind, int] = {
    SensorKind.TEMPERATURE: 0,
    SensorKind.NOISE: 1,
    SensorKind.OCCUPANCY: 2,
    SensorKind.CARBON_DIOXIDE: 3,
}


def sensor_kind_from_tag(tag: str) -> SensorKind:
    """Look up a sensor variant by its exact, case-sensitive tag"""
    try:
        return SensorKind(tag)
    except ValueError as e:
        raise FileFormatError(f"Unknown sensor type: {tag!r}") from e


def create_sensor(fields: List[str]) -> TimedSensor:
    """Create a sensor from colon separated fields.

    ``fields[0]`` is the variant tag and ``fields[1]`` the comma separated
    readings. Any remaining fields are the variant's own values, in save file
    order. Weightings must already be stripped off by the caller.
    """
    if len(fields) < 2:
        raise FileFormatError(f"Sensor line has too few fields: {fields}")

    kind = sensor_kind_from_tag(fields[0])
    expected = 2 + VARIANT_FIELD_COUNTS[kind]
    if len(fields) != expected:
        raise FileFormatError(
            f"{kind.value} expects {expected} fields, got {len(fields)}"
        )

    readings = parse_int_list(fields[1])
    values = [parse_int(token) for token in fields[2:]]

    try:
        return SENSOR_CLASSES[kind](readings, *values)
    except ValueError as e:
        raise FileFormatError(f"Invalid {kind.value}: {e}") from e
