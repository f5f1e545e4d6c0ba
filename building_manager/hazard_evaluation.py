# ABOUTME: Hazard evaluators that combine a room's sensor hazard levels into one score
# ABOUTME: Rule-based averaging with an occupancy multiplier, or fixed weightings

from typing import Dict, List, Optional, Sequence, Tuple

from building_manager.numeric import round_half_up
from building_manager.sensors import SensorKind, TimedSensor


class RuleBasedHazardEvaluator:
    """Evaluates hazard level from a fixed set of rules.

    - no sensors: 0
    - one sensor: that sensor's hazard level
    - any non-occupancy sensor at 100: 100
    - otherwise the average of the non-occupancy sensors, scaled by the
      occupancy sensor's hazard level as a fraction when one is present
    """

    tag = "RuleBased"

    def __init__(self, sensors: Sequence[TimedSensor]):
        self.sensors: List[TimedSensor] = list(sensors)

    def evaluate_hazard_level(self) -> int:
        if not self.sensors:
            return 0
        if len(self.sensors) == 1:
            return self.sensors[0].hazard_level

        occupancy_level: Optional[int] = None
        levels = []
        for sensor in self.sensors:
            if sensor.kind == SensorKind.OCCUPANCY:
                occupancy_level = sensor.hazard_level
                continue
            level = sensor.hazard_level
            if level == 100:
                return 100
            levels.append(level)

        if not levels:
            return occupancy_level or 0
        average = sum(levels) / len(levels)
        if occupancy_level is not None:
            average *= occupancy_level / 100.0
        return round_half_up(average)

    def __str__(self):
        return self.tag


class WeightingBasedHazardEvaluator:
    """Weighted average of sensor hazard levels.

    Weightings are integers between 0 and 100 that must sum to exactly 100.
    """

    tag = "WeightingBased"

    def __init__(self, weightings: Sequence[Tuple[TimedSensor, int]]):
        entries = list(weightings)
        total = 0
        for _, weighting in entries:
            if weighting < 0 or weighting > 100:
                raise ValueError(
                    f"Weightings must be between 0 and 100, got {weighting}"
                )
            total += weighting
        if total != 100:
            raise ValueError(f"Weightings must sum to 100, got {total}")

        self._weightings: Dict[SensorKind, Tuple[TimedSensor, int]] = {}
        for sensor, weighting in entries:
            if sensor.kind in self._weightings:
                raise ValueError(f"Duplicate weighting for {sensor.kind.value}")
            self._weightings[sensor.kind] = (sensor, weighting)

    @property
    def sensors(self) -> List[TimedSensor]:
        return [sensor for sensor, _ in self._weightings.values()]

    def weightings(self) -> List[int]:
        """Weightings in the order the sensors were given"""
        return [weighting for _, weighting in self._weightings.values()]

    def weighting_for(self, kind: SensorKind) -> int:
        if kind not in self._weightings:
            return 0
        return self._weightings[kind][1]

    def evaluate_hazard_level(self) -> int:
        weighted_sum = 0
        for sensor, weighting in self._weightings.values():
            weighted_sum += sensor.hazard_level * weighting
        return round_half_up(weighted_sum / 100.0)

    def __str__(self):
        return self.tag


HAZARD_EVALUATOR_TAGS = (
    RuleBasedHazardEvaluator.tag,
    WeightingBasedHazardEvaluator.tag,
)
