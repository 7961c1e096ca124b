"""Registry operations expressed the way the HTTP layer consumes them."""

from __future__ import annotations

from typing import Sequence

from datastore.sensor_registry import SensorRegistry
from models.records import Coordinate, Sensor


class SensorService:
    """Wraps a registry and turns missing records into ``KeyError``."""

    def __init__(self, registry: SensorRegistry) -> None:
        self.registry = registry

    def create_sensor(self, sensor: Sensor) -> Sensor:
        return self.registry.create(sensor)

    def list_sensors(self) -> list[Sensor]:
        return self.registry.list()

    def fetch_sensor(self, name: str) -> Sensor:
        sensor = self.registry.get_by_name(name)
        if sensor is None:
            raise KeyError(f"Sensor {name!r} not found.")
        return sensor

    def update_sensor(self, name: str, tags: Sequence[str], location: Coordinate) -> None:
        if not self.registry.update(name, tags, location):
            raise KeyError(f"Sensor {name!r} not found.")

    def delete_sensor(self, name: str) -> bool:
        """Delete every sensor called ``name``; a miss is reported, not raised."""
        return self.registry.delete(name)

    def nearest_sensor(self, target: Coordinate) -> Sensor:
        sensor = self.registry.find_nearest(target)
        if sensor is None:
            raise KeyError("No sensors registered.")
        return sensor
