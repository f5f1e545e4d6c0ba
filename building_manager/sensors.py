# ABOUTME: Timed sensor variants (temperature, noise, occupancy, carbon dioxide)
# ABOUTME: Each reports hazard and comfort levels and encodes itself for save files

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Sequence

from building_manager.numeric import round_half_up

MIN_UPDATE_FREQUENCY = 1
MAX_UPDATE_FREQUENCY = 5


class SensorKind(str, Enum):
    """Closed set of sensor variants, valued by their save file tag"""

    CARBON_DIOXIDE = "CarbonDioxideSensor"
    NOISE = "NoiseSensor"
    OCCUPANCY = "OccupancySensor"
    TEMPERATURE = "TemperatureSensor"


@dataclass(eq=True)
class TimedSensor:
    """A sensor that cycles through a fixed list of readings.

    The current reading starts at the first entry and moves to the next one
    every ``update_frequency`` minutes, wrapping around at the end.
    """

    kind: ClassVar[SensorKind]

    readings: Sequence[int]
    update_frequency: int

    def __post_init__(self):
        self.readings = tuple(self.readings)
        if not self.readings:
            raise ValueError("Sensor readings must not be empty")
        for reading in self.readings:
            if reading < 0:
                raise ValueError(f"Sensor reading must be non-negative: {reading}")
        if not MIN_UPDATE_FREQUENCY <= self.update_frequency <= MAX_UPDATE_FREQUENCY:
            raise ValueError(
                f"Update frequency must be between {MIN_UPDATE_FREQUENCY} "
                f"and {MAX_UPDATE_FREQUENCY}, got {self.update_frequency}"
            )
        self.time_elapsed = 0
        self._reading_index = 0

    @property
    def current_reading(self) -> int:
        return self.readings[self._reading_index]

    def elapse_one_minute(self):
        """Advance the sensor clock, moving to the next reading when due"""
        self.time_elapsed += 1
        if self.time_elapsed % self.update_frequency == 0:
            self._reading_index = (self._reading_index + 1) % len(self.readings)

    @property
    def hazard_level(self) -> int:
        raise NotImplementedError

    @property
    def comfort_level(self) -> int:
        raise NotImplementedError

    def _extra_fields(self) -> List[str]:
        return [str(self.update_frequency)]

    def encode(self) -> str:
        readings = ",".join(str(r) for r in self.readings)
        return ":".join([self.kind.value, readings] + self._extra_fields())


@dataclass(eq=True)
class TemperatureSensor(TimedSensor):
    """Ambient temperature in degrees Celsius, always updated every minute"""

    kind: ClassVar[SensorKind] = SensorKind.TEMPERATURE

    update_frequency: int = field(default=1, init=False)

    @property
    def hazard_level(self) -> int:
        # 68 degrees or hotter means the room is on fire
        return 100 if self.current_reading >= 68 else 0

    @property
    def comfort_level(self) -> int:
        reading = self.current_reading
        if 20 <= reading <= 26:
            return 100
        if reading < 20:
            return max(0, 100 - (20 - reading) * 20)
        return max(0, 100 - (reading - 26) * 20)

    def _extra_fields(self) -> List[str]:
        return []


@dataclass(eq=True)
class NoiseSensor(TimedSensor):
    """Sound level in decibels"""

    kind: ClassVar[SensorKind] = SensorKind.NOISE

    def relative_loudness(self) -> float:
        """Loudness relative to 70dB; every 10dB doubles perceived loudness"""
        return math.pow(2, (self.current_reading - 70) / 10.0)

    @property
    def hazard_level(self) -> int:
        # Loudness is at least 1.0 from 70dB up
        if self.current_reading >= 70:
            return 100
        return min(100, int(self.relative_loudness() * 100))

    @property
    def comfort_level(self) -> int:
        return max(0, 100 - self.hazard_level)


@dataclass(eq=True)
class OccupancySensor(TimedSensor):
    """Number of people in the room compared against its capacity"""

    kind: ClassVar[SensorKind] = SensorKind.OCCUPANCY

    capacity: int

    def __post_init__(self):
        super().__post_init__()
        if self.capacity < 0:
            raise ValueError(f"Capacity must be non-negative: {self.capacity}")

    @property
    def hazard_level(self) -> int:
        occupants = self.current_reading
        if self.capacity == 0:
            return 100 if occupants > 0 else 0
        return min(100, round_half_up(occupants / self.capacity * 100))

    @property
    def comfort_level(self) -> int:
        return 100 - self.hazard_level

    def _extra_fields(self) -> List[str]:
        return [str(self.update_frequency), str(self.capacity)]


@dataclass(eq=True)
class CarbonDioxideSensor(TimedSensor):
    """CO2 concentration in parts per million"""

    kind: ClassVar[SensorKind] = SensorKind.CARBON_DIOXIDE

    ideal_value: int
    variation_limit: int

    def __post_init__(self):
        super().__post_init__()
        if self.ideal_value < 0:
            raise ValueError(f"Ideal CO2 value must be non-negative: {self.ideal_value}")
        if self.variation_limit < 0:
            raise ValueError(
                f"Variation limit must be non-negative: {self.variation_limit}"
            )
        if self.variation_limit > self.ideal_value:
            raise ValueError("Variation limit cannot exceed the ideal CO2 value")

    @property
    def hazard_level(self) -> int:
        reading = self.current_reading
        if reading < 1000:
            return 0
        if reading < 2000:
            return 25
        if reading < 3000:
            return 50
        return 100

    @property
    def comfort_level(self) -> int:
        deviation = abs(self.current_reading - self.ideal_value)
        if deviation > self.variation_limit:
            return 0
        if self.variation_limit == 0:
            return 100
        return 100 - round_half_up(deviation / self.variation_limit * 100)

    def _extra_fields(self) -> List[str]:
        return [
            str(self.update_frequency),
            str(self.ideal_value),
            str(self.variation_limit),
        ]


SENSOR_CLASSES = {
    cls.kind: cls
    for cls in (CarbonDioxideSensor, NoiseSensor, OccupancySensor, TemperatureSensor)
}
