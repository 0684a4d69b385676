"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- CSVStationRepository: Loads the station network from CSV files
- DijkstraRouteSolver: Finds shortest routes using Dijkstra's algorithm
"""

from .csv_repository import CSVStationRepository
from .dijkstra_solver import DijkstraRouteSolver

__all__ = ["CSVStationRepository", "DijkstraRouteSolver"]
