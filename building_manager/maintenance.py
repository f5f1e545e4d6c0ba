# ABOUTME: Cyclic maintenance schedule that moves through a floor's rooms minute by minute
# ABOUTME: Holds room numbers only; the floor stays the owner of its rooms

from typing import TYPE_CHECKING, List, Optional, Sequence

import structlog

from building_manager.numeric import round_half_up
from building_manager.room import MIN_AREA, Room, RoomState, RoomType
from building_manager.timing import TickRegistry

if TYPE_CHECKING:
    from building_manager.floor import Floor

ROOM_TYPE_MULTIPLIERS = {
    RoomType.STUDY: 1.0,
    RoomType.OFFICE: 1.5,
    RoomType.LABORATORY: 2.0,
}


def validate_room_order(floor: "Floor", room_numbers: Sequence[int]):
    """Raise ValueError unless the order is usable as a schedule on ``floor``"""
    if not room_numbers:
        raise ValueError("Maintenance schedule needs at least one room")
    for number in room_numbers:
        if floor.get_room_by_number(number) is None:
            raise ValueError(f"Room {number} is not on floor {floor.floor_number}")
    if len(room_numbers) > 1:
        for i, number in enumerate(room_numbers):
            # The order is circular, so the last room sits next to the first
            if number == room_numbers[(i + 1) % len(room_numbers)]:
                raise ValueError(f"Room {number} appears twice in a row")


def maintenance_time(room: Room) -> int:
    """Minutes needed to maintain a room, from its area and type"""
    base = 5.0 + 0.2 * (room.area - MIN_AREA)
    return round_half_up(base * ROOM_TYPE_MULTIPLIERS[room.room_type])


class MaintenanceSchedule:
    """Cycles maintenance through an ordered list of rooms on one floor.

    The room under maintenance has its maintenance flag set. Each minute that
    the current room is not being evacuated counts towards its maintenance
    time; once that time is reached the schedule moves on to the next room,
    wrapping back to the first after the last.
    """

    def __init__(
        self,
        floor: "Floor",
        room_numbers: Sequence[int],
        registry: Optional[TickRegistry] = None,
    ):
        self.logger = structlog.getLogger(__name__)
        room_numbers = list(room_numbers)
        validate_room_order(floor, room_numbers)

        self._floor = floor
        self.room_numbers: List[int] = room_numbers
        self.current_room_index = 0
        self.time_elapsed = 0
        self.cleaned_rooms_time = 0
        self.time_elapsed_current_room = 0
        self.registry: Optional[TickRegistry] = None

        self.current_room.maintenance = True
        if registry is not None:
            self.attach(registry)

    def _room(self, index: int) -> Room:
        return self._floor.get_room_by_number(self.room_numbers[index])

    @property
    def current_room(self) -> Room:
        return self._room(self.current_room_index)

    @property
    def rooms(self) -> List[Room]:
        return [self._room(i) for i in range(len(self.room_numbers))]

    def maintenance_time(self, room: Room) -> int:
        return maintenance_time(room)

    def elapse_one_minute(self):
        """Progress maintenance by one minute unless the room is evacuating"""
        room = self.current_room
        if room.evaluate_room_state() == RoomState.EVACUATE:
            return

        self.time_elapsed += 1
        self.time_elapsed_current_room += 1

        room_time = maintenance_time(room)
        if self.time_elapsed - self.cleaned_rooms_time >= room_time:
            self.cleaned_rooms_time += room_time
            self._advance()

    def skip_current_maintenance(self):
        """Move straight to the next room, even during an evacuation"""
        self.cleaned_rooms_time += self.time_elapsed_current_room
        self._advance()

    def _advance(self):
        finished = self.current_room
        finished.maintenance = False
        self.current_room_index = (self.current_room_index + 1) % len(self.room_numbers)
        self.current_room.maintenance = True
        self.time_elapsed_current_room = 0
        self.logger.debug(
            "maintenance.advanced",
            floor=self._floor.floor_number,
            finished=finished.room_number,
            current=self.current_room.room_number,
        )

    def attach(self, registry: TickRegistry):
        """Start receiving ticks from ``registry``"""
        self.registry = registry
        registry.register(self)

    def stop(self):
        """Clear the current room's flag and stop receiving clock ticks"""
        self.current_room.maintenance = False
        if self.registry is not None:
            self.registry.unregister(self)

    def encode(self) -> str:
        return ",".join(str(number) for number in self.room_numbers)

    def __repr__(self):
        return (
            f"MaintenanceSchedule(current_room={self.current_room.room_number}, "
            f"time_elapsed={self.time_elapsed})"
        )
