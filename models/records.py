"""Domain models shared across services."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point in the plane."""

    x: float
    y: float

    def distance_to(self, other: Coordinate) -> float:
        """Euclidean distance between two coordinates."""
        return math.sqrt((other.x - self.x) ** 2 + (other.y - self.y) ** 2)


@dataclass(frozen=True, slots=True)
class Sensor:
    """A named sensor placed at a coordinate.

    Records are immutable; the registry replaces a stored record when its tags
    or location change, so values handed out never alias registry state.
    """

    name: str
    location: Coordinate
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))

    def relocated(self, tags: Tuple[str, ...], location: Coordinate) -> Sensor:
        """Return a copy with new tags and location; the name is kept."""
        return Sensor(name=self.name, location=location, tags=tuple(tags))
