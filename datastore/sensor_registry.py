from __future__ import annotations

import logging
from functools import lru_cache
from threading import Lock
from typing import Iterable, List, Optional, Sequence

from models.records import Coordinate, Sensor
from services.nearest import NearestSensorFinder
from settings import get_settings

logger = logging.getLogger(__name__)


SEED_SENSORS: tuple[Sensor, ...] = (
    Sensor(name="Sensor_1", tags=("This is a tag",), location=Coordinate(0.0, 0.0)),
    Sensor(name="Sensor_2", tags=("This is a tag_2",), location=Coordinate(60.0, 90.0)),
    Sensor(name="Sensor_3", tags=("This is a tag_3",), location=Coordinate(159.12, 7.13)),
)


class SensorRegistry:
    """Ordered in-memory store of sensors.

    Names are not unique. Lookups and updates act on the first record with a
    matching name in insertion order, while deletes remove every match.
    All operations hold a single lock for their duration only.
    """

    def __init__(
        self,
        sensors: Optional[Iterable[Sensor]] = None,
        finder: Optional[NearestSensorFinder] = None,
    ) -> None:
        self._sensors: List[Sensor] = list(sensors or ())
        self._finder = finder or NearestSensorFinder()
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sensors)

    def create(self, sensor: Sensor) -> Sensor:
        with self._lock:
            self._sensors.append(sensor)
        logger.info("Sensor created", extra={"sensor_name": sensor.name})
        return sensor

    def list(self) -> list[Sensor]:
        """Return a snapshot of every sensor in storage order."""

        with self._lock:
            return list(self._sensors)

    def get_by_name(self, name: str) -> Optional[Sensor]:
        with self._lock:
            for sensor in self._sensors:
                if sensor.name == name:
                    return sensor
        logger.debug("Sensor lookup missed", extra={"sensor_name": name})
        return None

    def update(self, name: str, tags: Sequence[str], location: Coordinate) -> bool:
        """Replace tags and location of the first sensor called ``name``."""

        with self._lock:
            for index, sensor in enumerate(self._sensors):
                if sensor.name == name:
                    self._sensors[index] = sensor.relocated(tuple(tags), location)
                    break
            else:
                logger.debug("Sensor update missed", extra={"sensor_name": name})
                return False
        logger.info(
            "Sensor updated",
            extra={"sensor_name": name, "x": location.x, "y": location.y},
        )
        return True

    def delete(self, name: str) -> bool:
        """Remove every sensor called ``name``; report whether any was removed."""

        with self._lock:
            remaining = [sensor for sensor in self._sensors if sensor.name != name]
            removed = len(self._sensors) - len(remaining)
            self._sensors = remaining
        if not removed:
            logger.debug("Sensor delete missed", extra={"sensor_name": name})
            return False
        logger.info(
            "Sensor deleted",
            extra={"sensor_name": name, "match_count": removed},
        )
        return True

    def find_nearest(self, target: Coordinate) -> Optional[Sensor]:
        with self._lock:
            match = self._finder.find(self._sensors, target)
        if match is None:
            logger.debug(
                "Nearest lookup on empty registry",
                extra={"x": target.x, "y": target.y},
            )
            return None
        logger.debug(
            "Nearest sensor resolved",
            extra={
                "sensor_name": match.sensor.name,
                "x": target.x,
                "y": target.y,
                "distance": match.distance,
            },
        )
        return match.sensor

    def reset(self, sensors: Iterable[Sensor] = ()) -> None:
        """Replace the registry contents wholesale."""

        with self._lock:
            self._sensors = list(sensors)
            count = len(self._sensors)
        logger.info("Registry reset", extra={"sensor_count": count})


@lru_cache
def build_default_registry() -> SensorRegistry:
    registry = SensorRegistry()
    if get_settings().seed_registry:
        registry.reset(SEED_SENSORS)
    return registry
