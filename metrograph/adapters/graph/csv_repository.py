"""CSV station repository adapter.

Builds the metro graph from three CSV files:

- ``stations.csv``: ``station_id,line,name,longitude,latitude,commune,insee``
  with ids dense from 0. A stop served by two lines appears twice.
- ``links.csv``: ``station_id,previous_id,next_id``; each filled cell adds
  an edge weighted by the ride time on the station's line. Either
  neighbor may be blank at the end of a line.
- ``transfers.csv`` (optional): ``from_station_id,to_station_id,minutes``;
  walking transfers, added in both directions.

Every failure while reading or assembling the data is reported as a
:class:`~metrograph.domain.errors.GraphError`.
"""

from __future__ import annotations

import csv
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from ...config import GraphConfig, get_config
from ...domain.errors import GraphError, MetroGraphError, NodeNotFoundError, StationNotFoundError
from ...domain.models import GeoLocation, Station
from ...graph.graph import NO_EDGE, Graph, NodeStyle
from ...graph.registry import NodeRegistry


@dataclass
class CSVStationRepository:
    """Station repository that loads from CSV files.

    This adapter implements StationRepositoryPort. The graph is built on
    first use and cached; it is immutable and can be shared by
    concurrent route requests.

    Attributes:
        config: Graph configuration (paths, file names)
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    # Cached data
    _graph: Optional[Graph[Station]] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> Graph[Station]:
        """Load the station graph from CSV files.

        Returns:
            The graph whose payloads are stations and whose weights are
            travel minutes.

        Raises:
            GraphError: If the graph cannot be loaded.
        """
        with self._lock:
            if self._graph is not None:
                return self._graph

            self._logger.debug(
                "Loading station network",
                extra={
                    "stations_path": str(self.config.stations_path),
                    "links_path": str(self.config.links_path),
                },
            )

            try:
                graph = self._build_graph()
            except GraphError:
                raise
            except (OSError, KeyError, ValueError, MetroGraphError) as e:
                raise GraphError(
                    f"Failed to load station network: {e}",
                    file_path=str(self.config.stations_path),
                    cause=e,
                )

            self._graph = graph
            self._logger.info(
                "Station network loaded",
                extra={"stations": graph.order, "edges": graph.size},
            )
            return graph

    def _build_graph(self) -> Graph[Station]:
        rows = sorted(
            self._read_rows(self.config.stations_path),
            key=lambda row: int(row["station_id"]),
        )

        registry: NodeRegistry[Station] = NodeRegistry()
        styles: Dict[int, NodeStyle] = {}
        for expected_id, row in enumerate(rows):
            station_id = int(row["station_id"])
            if station_id != expected_id:
                raise GraphError(
                    f"Station ids must be dense from 0, expected {expected_id} "
                    f"but found {station_id}",
                    file_path=str(self.config.stations_path),
                )
            station = self._parse_station(row)
            registry.register(station)
            styles[station_id] = NodeStyle(
                label=station.name,
                color=station.line_color,
                x=station.location.longitude,
                y=station.location.latitude,
            )

        count = len(rows)
        matrix: List[List[float]] = [[NO_EDGE] * count for _ in range(count)]
        for i in range(count):
            matrix[i][i] = 0.0

        for row in self._read_rows(self.config.links_path):
            station_id = int(row["station_id"])
            station = registry.by_id(station_id).payload
            for column in ("previous_id", "next_id"):
                value = (row.get(column) or "").strip()
                if not value:
                    continue
                other_id = int(value)
                other = registry.by_id(other_id).payload
                matrix[station_id][other_id] = station.travel_minutes_to(other)

        transfers_path = self.config.transfers_path
        if transfers_path.exists():
            for row in self._read_rows(transfers_path):
                first = int(row["from_station_id"])
                second = int(row["to_station_id"])
                registry.by_id(first)
                registry.by_id(second)
                minutes = float(row["minutes"])
                if minutes < 0:
                    raise GraphError(
                        f"Transfer time must not be negative, got {minutes} "
                        f"between {first} and {second}",
                        file_path=str(transfers_path),
                    )
                matrix[first][second] = minutes
                matrix[second][first] = minutes
        else:
            self._logger.info(
                "No transfers file, lines are not connected",
                extra={"transfers_path": str(transfers_path)},
            )

        return Graph.from_adjacency_matrix(matrix, registry, styles)

    @staticmethod
    def _read_rows(path: Path) -> Iterator[Dict[str, str]]:
        with path.open(encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            for row in reader:
                # DictReader collects surplus cells under the None key
                if None in row:
                    raise GraphError(
                        f"Line {reader.line_num} has more fields than the header",
                        file_path=str(path),
                    )
                if any((value or "").strip() for value in row.values()):
                    yield {k.strip(): (v or "").strip() for k, v in row.items() if k}

    @staticmethod
    def _parse_station(row: Dict[str, str]) -> Station:
        insee = row.get("insee", "")
        return Station(
            line=row["line"],
            name=row["name"],
            location=GeoLocation(
                latitude=float(row["latitude"]),
                longitude=float(row["longitude"]),
            ),
            commune=row.get("commune", ""),
            insee=int(insee) if insee else 0,
        )

    def get_station(self, station_id: int) -> Optional[Station]:
        """Get station details by id.

        Returns:
            The station, or None if not found.
        """
        graph = self.load()
        try:
            return graph.payload(station_id)
        except NodeNotFoundError:
            return None

    def get_station_or_raise(self, station_id: int) -> Station:
        """Get station details by id, raising if not found.

        Raises:
            StationNotFoundError: If the station is not found.
        """
        station = self.get_station(station_id)
        if station is None:
            raise StationNotFoundError(
                f"Station not found: {station_id}",
                station_id=station_id,
            )
        return station

    def list_stations(self) -> Sequence[Station]:
        """List all stations in id order."""
        graph = self.load()
        return [graph.payload(node_id) for node_id in graph.node_ids]

    def clear_cache(self) -> None:
        """Drop the cached graph; the next load() reads the files again."""
        with self._lock:
            self._graph = None
        self._logger.debug("Station network cache cleared")
