# ABOUTME: Registry of items that advance with the simulated building clock
# ABOUTME: Schedules and sensors register here and are ticked one minute at a time

from typing import List, Protocol

import structlog


class TimedItem(Protocol):
    def elapse_one_minute(self) -> None: ...


class TickRegistry:
    """Delivers clock ticks to registered items in registration order"""

    def __init__(self):
        self.logger = structlog.getLogger(__name__)
        self._items: List[TimedItem] = []
        self.minutes_elapsed = 0

    @property
    def items(self) -> List[TimedItem]:
        return list(self._items)

    def register(self, item: TimedItem):
        if any(existing is item for existing in self._items):
            return
        self._items.append(item)

    def unregister(self, item: TimedItem):
        self._items = [existing for existing in self._items if existing is not item]

    def elapse_one_minute(self):
        """Tick every registered item once, each finishing before the next starts"""
        self.minutes_elapsed += 1
        for item in list(self._items):
            item.elapse_one_minute()
        self.logger.debug(
            "clock.tick", minute=self.minutes_elapsed, items=len(self._items)
        )

    def elapse_minutes(self, minutes: int):
        for _ in range(minutes):
            self.elapse_one_minute()
