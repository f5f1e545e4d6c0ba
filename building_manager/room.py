# ABOUTME: Room model owning its sensors, hazard evaluator and drill/maintenance flags
# ABOUTME: Sensors are unique by kind and kept sorted by their save file tag

from enum import Enum
from typing import List, Optional, Union

import structlog

from building_manager.errors import DuplicateSensorError
from building_manager.hazard_evaluation import (
    RuleBasedHazardEvaluator,
    WeightingBasedHazardEvaluator,
)
from building_manager.sensors import SensorKind, TimedSensor

MIN_AREA = 5

HazardEvaluator = Union[RuleBasedHazardEvaluator, WeightingBasedHazardEvaluator]


class RoomType(str, Enum):
    STUDY = "STUDY"
    OFFICE = "OFFICE"
    LABORATORY = "LABORATORY"


class RoomState(str, Enum):
    OPEN = "OPEN"
    EVACUATE = "EVACUATE"
    MAINTENANCE = "MAINTENANCE"


class Room:
    def __init__(self, room_number: int, room_type: RoomType, area: float):
        if room_number < 0:
            raise ValueError(f"Room number must be non-negative: {room_number}")
        if area < MIN_AREA:
            raise ValueError(f"Room area cannot be less than {MIN_AREA}")
        self.logger = structlog.getLogger(__name__)
        self.room_number = room_number
        self.room_type = RoomType(room_type)
        self.area = area
        self.fire_drill = False
        self.maintenance = False
        self._sensors: List[TimedSensor] = []
        self._hazard_evaluator: Optional[HazardEvaluator] = None

    @property
    def sensors(self) -> List[TimedSensor]:
        """Copy of the room's sensors, sorted by tag"""
        return list(self._sensors)

    def hazard_sensors(self) -> List[TimedSensor]:
        # Every sensor variant reports a hazard level
        return list(self._sensors)

    @property
    def hazard_evaluator(self) -> Optional[HazardEvaluator]:
        return self._hazard_evaluator

    @hazard_evaluator.setter
    def hazard_evaluator(self, evaluator: Optional[HazardEvaluator]):
        self._hazard_evaluator = evaluator

    def get_sensor(self, kind: SensorKind) -> Optional[TimedSensor]:
        for sensor in self._sensors:
            if sensor.kind == kind:
                return sensor
        return None

    def add_sensor(self, sensor: TimedSensor):
        """Add a sensor, clearing any evaluator built from the old sensor set"""
        if self.get_sensor(sensor.kind) is not None:
            raise DuplicateSensorError(
                f"Room {self.room_number} already has a {sensor.kind.value}"
            )
        self._sensors.append(sensor)
        self._sensors.sort(key=lambda s: s.kind.value)
        if self._hazard_evaluator is not None:
            self.logger.debug(
                "room.hazard_evaluator_cleared", room=self.room_number
            )
        self._hazard_evaluator = None

    def evaluate_room_state(self) -> RoomState:
        temperature = self.get_sensor(SensorKind.TEMPERATURE)
        if temperature is not None and temperature.hazard_level == 100:
            return RoomState.EVACUATE
        if self.fire_drill:
            return RoomState.EVACUATE
        if self.maintenance:
            return RoomState.MAINTENANCE
        return RoomState.OPEN

    def encode(self) -> str:
        header = [
            str(self.room_number),
            self.room_type.value,
            f"{self.area:.2f}",
            str(len(self._sensors)),
        ]
        evaluator = self._hazard_evaluator
        if evaluator is not None:
            header.append(evaluator.tag)

        lines = [":".join(header)]
        for sensor in self._sensors:
            line = sensor.encode()
            if isinstance(evaluator, WeightingBasedHazardEvaluator):
                line = f"{line}@{evaluator.weighting_for(sensor.kind)}"
            lines.append(line)
        return "\n".join(lines)

    def __eq__(self, other):
        if not isinstance(other, Room):
            return NotImplemented
        if (
            self.room_number != other.room_number
            or self.room_type != other.room_type
            or abs(self.area - other.area) > 0.001
            or len(self._sensors) != len(other._sensors)
        ):
            return False
        return all(s == other.get_sensor(s.kind) for s in self._sensors)

    def __repr__(self):
        return (
            f"Room(room_number={self.room_number}, room_type={self.room_type.value}, "
            f"area={self.area:.2f}, sensors={len(self._sensors)})"
        )
