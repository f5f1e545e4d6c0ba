# ABOUTME: Building model holding floors in the order they were added
# ABOUTME: Each new floor must rest on the floor below and be no larger than it

from typing import List, Optional

import structlog

from building_manager.errors import (
    DuplicateFloorError,
    FireDrillError,
    FloorTooSmallError,
    NoFloorBelowError,
)
from building_manager.floor import Floor
from building_manager.room import RoomType


class Building:
    def __init__(self, name: str):
        self.logger = structlog.getLogger(__name__)
        self.name = name
        self._floors: List[Floor] = []

    @property
    def floors(self) -> List[Floor]:
        return list(self._floors)

    def get_floor_by_number(self, floor_number: int) -> Optional[Floor]:
        for floor in self._floors:
            if floor.floor_number == floor_number:
                return floor
        return None

    def add_floor(self, floor: Floor):
        """Add a floor on top of the existing ones.

        The first floor of a building can have any number. Every later floor
        needs the floor numbered one below it to already be present, and its
        area cannot exceed that floor's area.
        """
        if self.get_floor_by_number(floor.floor_number) is not None:
            raise DuplicateFloorError(
                f"Floor {floor.floor_number} already exists in {self.name}"
            )
        if self._floors:
            below = self.get_floor_by_number(floor.floor_number - 1)
            if below is None:
                raise NoFloorBelowError(
                    f"Floor {floor.floor_number} has no floor below to support it"
                )
            if floor.calculate_area() > below.calculate_area():
                raise FloorTooSmallError(
                    f"Floor {below.floor_number} is too small to support "
                    f"floor {floor.floor_number}"
                )
        self._floors.append(floor)

    def fire_drill(self, room_type: Optional[RoomType] = None):
        if not self._floors:
            raise FireDrillError(f"{self.name} has no floors")
        if not any(floor.rooms for floor in self._floors):
            raise FireDrillError(f"{self.name} has no rooms")
        for floor in self._floors:
            floor.fire_drill(room_type)
        self.logger.info(
            "building.fire_drill",
            building=self.name,
            room_type=room_type.value if room_type else None,
        )

    def cancel_fire_drill(self):
        for floor in self._floors:
            floor.cancel_fire_drill()

    def encode(self) -> str:
        lines = [self.name, str(len(self._floors))]
        lines.extend(floor.encode() for floor in self._floors)
        return "\n".join(lines)

    def __eq__(self, other):
        if not isinstance(other, Building):
            return NotImplemented
        if self.name != other.name or len(self._floors) != len(other._floors):
            return False
        return all(
            floor == other.get_floor_by_number(floor.floor_number)
            for floor in self._floors
        )

    def __repr__(self):
        return f"Building(name={self.name!r}, floors={len(self._floors)})"
