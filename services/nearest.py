"""Nearest-neighbour lookup over an ordered collection of sensors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from models.records import Coordinate, Sensor


@dataclass(frozen=True)
class NearestMatch:
    """The winning sensor along with its distance to the query point."""

    sensor: Sensor
    distance: float
    exact: bool


class NearestSensorFinder:
    """Pure linear-scan nearest-neighbour component.

    An exact location match short-circuits the scan. Otherwise the closest
    sensor by Euclidean distance wins, and ties go to the sensor seen first
    because the best candidate is only replaced on a strictly smaller distance.
    """

    def find(self, sensors: Iterable[Sensor], target: Coordinate) -> Optional[NearestMatch]:
        candidates = list(sensors)
        if not candidates:
            return None

        for sensor in candidates:
            if sensor.location == target:
                return NearestMatch(sensor=sensor, distance=0.0, exact=True)

        best = candidates[0]
        best_distance = target.distance_to(best.location)
        for sensor in candidates[1:]:
            distance = target.distance_to(sensor.location)
            if distance < best_distance:
                best = sensor
                best_distance = distance

        return NearestMatch(sensor=best, distance=best_distance, exact=False)
