"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the routing core to external systems:
- Station data (CSV files)
- Route solving (Dijkstra over the station graph)
- Geocoding services (Nominatim)
- Caching systems (in-memory, null)
"""
