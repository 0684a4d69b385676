"""Immutable domain models for the metro router.

All models are frozen dataclasses with slots. Stations are the node
payloads of the transit graph, so they must stay hashable and compare
by value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

EARTH_RADIUS_KM = 6371.0
MINUTES_PER_HOUR = 60.0
DEFAULT_LINE_COLOR = "#000000"

# Official line colors of the Paris metro.
LINE_COLORS: dict[str, str] = {
    "1": "#FFCE00",
    "2": "#0064B0",
    "3": "#9F9825",
    "3bis": "#98D4E2",
    "4": "#C04191",
    "5": "#F28E42",
    "6": "#83C491",
    "7": "#F3A4BA",
    "7bis": "#83C491",
    "8": "#CEADD2",
    "9": "#D5C900",
    "10": "#E3B32A",
    "11": "#8D5E2A",
    "12": "#00814F",
    "13": "#98D4E2",
    "14": "#662483",
}

# Average commercial speed per line, in km/h.
LINE_SPEEDS_KMH: dict[str, float] = {
    "1": 30.0,
    "2": 21.6,
    "3": 22.5,
    "3bis": 19.0,
    "4": 21.6,
    "5": 25.9,
    "6": 26.3,
    "7": 28.1,
    "7bis": 23.0,
    "8": 26.9,
    "9": 22.6,
    "10": 25.1,
    "11": 28.1,
    "12": 27.2,
    "13": 39.0,
    "14": 40.0,
}


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    def distance_km(self, other: GeoLocation) -> float:
        """Great-circle distance to ``other`` (haversine formula)."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        d_lat = lat1 - lat2
        d_lon = math.radians(self.longitude) - math.radians(other.longitude)
        h = math.sin(d_lat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(
            d_lon / 2.0
        ) ** 2
        return 2.0 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


@dataclass(frozen=True, slots=True)
class Station:
    """A metro station served by one line.

    The same physical stop served by two lines is two stations; the
    walk between them is a transfer edge in the graph.

    Attributes:
        line: Line identifier (e.g. '4', '7bis')
        name: Human-readable station name
        location: GPS coordinates of the platform
        commune: Commune the station belongs to
        insee: INSEE code of the commune
    """

    line: str
    name: str
    location: GeoLocation
    commune: str = ""
    insee: int = 0

    @property
    def line_color(self) -> str:
        """Return the line color, black for unknown lines."""
        return LINE_COLORS.get(self.line, DEFAULT_LINE_COLOR)

    @property
    def speed_kmh(self) -> float:
        """Return the commercial speed of the line.

        Raises:
            ValueError: If the line is unknown.
        """
        try:
            return LINE_SPEEDS_KMH[self.line]
        except KeyError:
            raise ValueError(f"Invalid line: {self.line!r}") from None

    def distance_km_to(self, other: Station) -> float:
        """Return the great-circle distance to another station."""
        return self.location.distance_km(other.location)

    def travel_minutes_to(self, other: Station) -> float:
        """Return the time needed to ride to ``other`` on this station's line."""
        return self.distance_km_to(other) / self.speed_kmh * MINUTES_PER_HOUR

    def __str__(self) -> str:
        return f"{self.name} ({self.line})"


@dataclass(frozen=True, slots=True)
class RouteStep:
    """One stop of a computed route, as exposed to outer layers."""

    station_name: str
    longitude: float
    latitude: float


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of route computation between stations.

    Attributes:
        path: Ordered tuple of station ids forming the route
        total_minutes: Total travel time of the route
        stations: Resolved station details for each stop
    """

    path: tuple[int, ...]
    total_minutes: float
    stations: tuple[Station, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """Check if no route was found."""
        return len(self.path) == 0

    @property
    def num_stops(self) -> int:
        """Return the number of stops in the route."""
        return len(self.path)

    @property
    def departure(self) -> Optional[Station]:
        return self.stations[0] if self.stations else None

    @property
    def arrival(self) -> Optional[Station]:
        return self.stations[-1] if self.stations else None

    def steps(self) -> tuple[RouteStep, ...]:
        """Return ``(station name, longitude, latitude)`` for every stop."""
        return tuple(
            RouteStep(
                station_name=station.name,
                longitude=station.location.longitude,
                latitude=station.location.latitude,
            )
            for station in self.stations
        )
