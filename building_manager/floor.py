# ABOUTME: Floor model holding an ordered set of rooms and an optional maintenance schedule
# ABOUTME: Guards room uniqueness, free floor area and minimum dimensions

from typing import List, Optional, Sequence

import structlog

from building_manager.errors import (
    DuplicateRoomError,
    FloorTooSmallError,
    InsufficientSpaceError,
)
from building_manager.maintenance import MaintenanceSchedule, validate_room_order
from building_manager.room import MIN_AREA, Room, RoomType
from building_manager.timing import TickRegistry

MIN_WIDTH = 5
MIN_LENGTH = 5


class Floor:
    def __init__(self, floor_number: int, width: float, length: float):
        if floor_number <= 0:
            raise ValueError(f"Floor number must be positive: {floor_number}")
        if width < MIN_WIDTH:
            raise ValueError(f"Floor width cannot be less than {MIN_WIDTH}")
        if length < MIN_LENGTH:
            raise ValueError(f"Floor length cannot be less than {MIN_LENGTH}")
        self.logger = structlog.getLogger(__name__)
        self.floor_number = floor_number
        self.width = width
        self.length = length
        self._rooms: List[Room] = []
        self.maintenance_schedule: Optional[MaintenanceSchedule] = None

    @property
    def rooms(self) -> List[Room]:
        return list(self._rooms)

    def calculate_area(self) -> float:
        return self.width * self.length

    def occupied_area(self) -> float:
        return sum(room.area for room in self._rooms)

    def get_room_by_number(self, room_number: int) -> Optional[Room]:
        for room in self._rooms:
            if room.room_number == room_number:
                return room
        return None

    def add_room(self, room: Room):
        """Append a room if its number is free and it fits in the unused area"""
        if room.area < MIN_AREA:
            raise ValueError(f"Room area cannot be less than {MIN_AREA}")
        if self.get_room_by_number(room.room_number) is not None:
            raise DuplicateRoomError(
                f"Room {room.room_number} already exists on floor {self.floor_number}"
            )
        if self.occupied_area() + room.area > self.calculate_area():
            raise InsufficientSpaceError(
                f"Insufficient space for room {room.room_number}: "
                f"floor area {self.calculate_area():.2f}m^2, "
                f"occupied {self.occupied_area():.2f}m^2, room {room.area:.2f}m^2"
            )
        self._rooms.append(room)

    def change_dimensions(self, width: float, length: float):
        if width < MIN_WIDTH:
            raise ValueError(f"New width cannot be less than {MIN_WIDTH}")
        if length < MIN_LENGTH:
            raise ValueError(f"New length cannot be less than {MIN_LENGTH}")
        if width * length < self.occupied_area():
            raise FloorTooSmallError(
                "The current rooms would not fit within the new dimensions"
            )
        self.width = width
        self.length = length

    def fire_drill(self, room_type: Optional[RoomType] = None):
        """Start a fire drill in every room, or only rooms of ``room_type``"""
        for room in self._rooms:
            if room_type is None or room.room_type == room_type:
                room.fire_drill = True

    def cancel_fire_drill(self):
        for room in self._rooms:
            room.fire_drill = False

    def create_maintenance_schedule(
        self, room_numbers: Sequence[int], registry: Optional[TickRegistry] = None
    ) -> MaintenanceSchedule:
        """Replace the floor's schedule with one over ``room_numbers``.

        The old schedule's current room leaves maintenance and the old
        schedule stops receiving ticks. Raises ValueError if the new order is
        empty, names a room not on this floor, or repeats a room back to back.
        """
        room_numbers = list(room_numbers)
        # A bad order leaves the old schedule running
        validate_room_order(self, room_numbers)
        previous = self.maintenance_schedule
        if previous is not None:
            previous.stop()
        self.maintenance_schedule = MaintenanceSchedule(self, room_numbers, registry)
        self.logger.info(
            "floor.maintenance_scheduled",
            floor=self.floor_number,
            rooms=list(room_numbers),
        )
        return self.maintenance_schedule

    def encode(self) -> str:
        header = [
            str(self.floor_number),
            f"{self.width:.2f}",
            f"{self.length:.2f}",
            str(len(self._rooms)),
        ]
        if self.maintenance_schedule is not None:
            header.append(self.maintenance_schedule.encode())
        return "\n".join([":".join(header)] + [room.encode() for room in self._rooms])

    def __eq__(self, other):
        if not isinstance(other, Floor):
            return NotImplemented
        if (
            self.floor_number != other.floor_number
            or abs(self.width - other.width) > 0.001
            or abs(self.length - other.length) > 0.001
            or len(self._rooms) != len(other._rooms)
        ):
            return False
        return all(
            room == other.get_room_by_number(room.room_number) for room in self._rooms
        )

    def __repr__(self):
        return (
            f"Floor(floor_number={self.floor_number}, width={self.width:.2f}, "
            f"length={self.length:.2f}, rooms={len(self._rooms)})"
        )
