"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.records import Coordinate, Sensor


class CoordinateSchema(BaseModel):
    """A point in the plane as carried on the wire."""

    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float

    def to_domain(self) -> Coordinate:
        return Coordinate(x=self.x, y=self.y)

    @classmethod
    def from_domain(cls, coordinate: Coordinate) -> CoordinateSchema:
        return cls(x=coordinate.x, y=coordinate.y)


class SensorSchema(BaseModel):
    """Full sensor record, used for both requests and responses."""

    name: str = Field(..., description="Identifier used to address the sensor.")
    tags: List[str] = Field(default_factory=list)
    location: CoordinateSchema

    def to_domain(self) -> Sensor:
        return Sensor(name=self.name, tags=tuple(self.tags), location=self.location.to_domain())

    @classmethod
    def from_domain(cls, sensor: Sensor) -> SensorSchema:
        return cls(
            name=sensor.name,
            tags=list(sensor.tags),
            location=CoordinateSchema.from_domain(sensor.location),
        )


class SensorUpdate(BaseModel):
    """Replacement tags and location for an existing sensor."""

    tags: List[str] = Field(default_factory=list)
    location: CoordinateSchema


class OperationMessage(BaseModel):
    """Outcome of a mutation that has no record to return."""

    success: Optional[str] = None
    error: Optional[str] = None
