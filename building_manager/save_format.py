# ABOUTME: Reads and writes buildings in the colon delimited save file format
# ABOUTME: Decoding validates every building invariant and fails as a whole on any error

from typing import Iterable, List, Optional, TextIO, Tuple

import structlog

from building_manager import config
from building_manager.building import Building
from building_manager.errors import (
    DuplicateFloorError,
    DuplicateRoomError,
    DuplicateSensorError,
    FileFormatError,
    FloorTooSmallError,
    InsufficientSpaceError,
    NoFloorBelowError,
)
from building_manager.floor import MIN_LENGTH, MIN_WIDTH, Floor
from building_manager.hazard_evaluation import (
    HAZARD_EVALUATOR_TAGS,
    RuleBasedHazardEvaluator,
    WeightingBasedHazardEvaluator,
)
from building_manager.maintenance import MaintenanceSchedule
from building_manager.numeric import (
    parse_float,
    parse_int,
    parse_int_list,
    parse_non_negative_int,
    parse_positive_int,
)
from building_manager.room import MIN_AREA, Room, RoomType
from building_manager.schemas import FailureKind, LoadFailure, LoadResult
from building_manager.sensor_factory import create_sensor
from building_manager.sensors import TimedSensor
from building_manager.timing import TickRegistry

logger = structlog.get_logger(__name__)

# Save file layout, square brackets marking optional parts:
#
#   buildingName
#   numFloors
#   floorNumber:width:length:numRooms[:room,numbers,in,maintenance,order]
#   roomNumber:ROOM_TYPE:area:numSensors[:RuleBased|WeightingBased]
#   SensorType:reading,reading,...[:sensorFields...][@weighting]


class _LineReader:
    def __init__(self, stream: TextIO):
        self.stream = stream
        self.line_number = 0

    def read_line(self) -> Optional[str]:
        """Next line without its line ending, or None at end of stream"""
        line = self.stream.readline()
        if line == "":
            return None
        self.line_number += 1
        return line.rstrip("\r\n")

    def require_line(self, what: str) -> str:
        line = self.read_line()
        if line is None:
            raise FileFormatError(f"Unexpected end of file, expected {what}")
        if line == "":
            raise FileFormatError(f"Line {self.line_number}: empty {what} line")
        return line


def _split_fields(line: str, what: str, min_fields: int, max_fields: int) -> List[str]:
    fields = line.split(":")
    if not min_fields <= len(fields) <= max_fields:
        raise FileFormatError(
            f"{what} line has {len(fields)} fields, expected "
            f"{min_fields} to {max_fields}: {line!r}"
        )
    return fields


def _split_weighting(line: str) -> Tuple[str, int]:
    """Strip the ``@weighting`` suffix off a sensor line"""
    if line.count("@") != 1:
        raise FileFormatError(f"Sensor line needs exactly one weighting: {line!r}")
    body, _, weighting = line.partition("@")
    return body, parse_int(weighting)


def _read_sensor(line: str) -> TimedSensor:
    return create_sensor(line.split(":"))


def _read_room(reader: _LineReader) -> Room:
    fields = _split_fields(reader.require_line("room"), "Room", 4, 5)

    room_number = parse_non_negative_int(fields[0])
    try:
        room_type = RoomType(fields[1])
    except ValueError as e:
        raise FileFormatError(f"Unknown room type: {fields[1]!r}") from e
    area = parse_float(fields[2])
    if area < MIN_AREA:
        raise FileFormatError(f"Room {room_number} is smaller than {MIN_AREA}m^2")
    num_sensors = parse_non_negative_int(fields[3])

    evaluator_tag = fields[4] if len(fields) == 5 else None
    if evaluator_tag is not None and evaluator_tag not in HAZARD_EVALUATOR_TAGS:
        raise FileFormatError(f"Unknown hazard evaluator: {evaluator_tag!r}")
    weighted = evaluator_tag == WeightingBasedHazardEvaluator.tag

    room = Room(room_number, room_type, area)
    weightings: List[Tuple[TimedSensor, int]] = []
    for _ in range(num_sensors):
        line = reader.require_line("sensor")
        if weighted:
            line, weighting = _split_weighting(line)
        sensor = _read_sensor(line)
        try:
            room.add_sensor(sensor)
        except DuplicateSensorError as e:
            raise FileFormatError(str(e)) from e
        if weighted:
            weightings.append((sensor, weighting))

    if evaluator_tag == RuleBasedHazardEvaluator.tag:
        room.hazard_evaluator = RuleBasedHazardEvaluator(room.hazard_sensors())
    elif weighted:
        try:
            room.hazard_evaluator = WeightingBasedHazardEvaluator(weightings)
        except ValueError as e:
            raise FileFormatError(f"Room {room_number}: {e}") from e
    return room


def _read_floor(
    reader: _LineReader, schedules: List[MaintenanceSchedule]
) -> Floor:
    fields = _split_fields(reader.require_line("floor"), "Floor", 4, 5)

    floor_number = parse_positive_int(fields[0])
    width = parse_float(fields[1])
    length = parse_float(fields[2])
    num_rooms = parse_non_negative_int(fields[3])
    if width < MIN_WIDTH or length < MIN_LENGTH:
        raise FileFormatError(f"Floor {floor_number} is below the minimum dimensions")

    floor = Floor(floor_number, width, length)
    for _ in range(num_rooms):
        room = _read_room(reader)
        try:
            floor.add_room(room)
        except (DuplicateRoomError, InsufficientSpaceError, ValueError) as e:
            raise FileFormatError(str(e)) from e

    if len(floor.rooms) != num_rooms:
        raise FileFormatError(
            f"Floor {floor_number} declares {num_rooms} rooms, read {len(floor.rooms)}"
        )

    if len(fields) == 5:
        room_numbers = parse_int_list(fields[4])
        try:
            schedules.append(floor.create_maintenance_schedule(room_numbers))
        except ValueError as e:
            raise FileFormatError(str(e)) from e
    return floor


def _read_building(
    reader: _LineReader, name: str, schedules: List[MaintenanceSchedule]
) -> Building:
    building = Building(name)
    num_floors = parse_non_negative_int(reader.require_line("floor count"))
    for _ in range(num_floors):
        floor = _read_floor(reader, schedules)
        try:
            building.add_floor(floor)
        except (DuplicateFloorError, NoFloorBelowError, FloorTooSmallError) as e:
            raise FileFormatError(str(e)) from e
    return building


def load_buildings(
    stream: TextIO, registry: Optional[TickRegistry] = None
) -> List[Building]:
    """Decode every building in ``stream``.

    Raises FileFormatError if any part of the stream is invalid, in which case
    nothing is returned and nothing is registered with ``registry``. Errors
    raised by the stream itself propagate unchanged.
    """
    reader = _LineReader(stream)
    buildings: List[Building] = []
    schedules: List[MaintenanceSchedule] = []
    try:
        name = reader.read_line()
        while name is not None:
            if name == "":
                raise FileFormatError(f"Line {reader.line_number}: empty building name")
            buildings.append(_read_building(reader, name, schedules))
            name = reader.read_line()
    except FileFormatError as e:
        logger.warning(
            "save_file.invalid", line=reader.line_number, error=str(e)
        )
        raise

    if registry is not None:
        for schedule in schedules:
            schedule.attach(registry)
    logger.info("save_file.loaded", buildings=len(buildings))
    return buildings


def try_load_buildings(
    stream: TextIO, registry: Optional[TickRegistry] = None
) -> LoadResult:
    """Like load_buildings, but reports failures as a tagged result"""
    try:
        return LoadResult(buildings=load_buildings(stream, registry))
    except FileFormatError as e:
        return LoadResult(failure=LoadFailure(kind=FailureKind.FORMAT, detail=str(e)))
    except (OSError, UnicodeDecodeError) as e:
        logger.error("save_file.read_failed", error=str(e))
        return LoadResult(
            failure=LoadFailure(kind=FailureKind.TRANSPORT, detail=str(e))
        )


def encode_buildings(buildings: Iterable[Building]) -> str:
    return "\n".join(building.encode() for building in buildings)


def save_buildings(stream: TextIO, buildings: Iterable[Building]):
    text = encode_buildings(buildings)
    if text:
        stream.write(text + "\n")


def load_buildings_from_file(
    path: Optional[str] = None, registry: Optional[TickRegistry] = None
) -> List[Building]:
    path = path or config.default_save_path()
    with open(path, "r", encoding=config.file_encoding()) as f:
        return load_buildings(f, registry)


def save_buildings_to_file(buildings: Iterable[Building], path: Optional[str] = None):
    path = path or config.default_save_path()
    with open(path, "w", encoding=config.file_encoding()) as f:
        save_buildings(f, buildings)
    logger.info("save_file.saved", path=path)
