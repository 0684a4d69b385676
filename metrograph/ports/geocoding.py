"""Geocoding port - Abstraction for address lookup.

This protocol defines the contract for geocoding services, allowing
different implementations (Nominatim, a static table in tests, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeoLocation


class GeocoderPort(Protocol):
    """Port for geocoding services.

    Implementation: adapters/geocoding/nominatim_adapter.py
    """

    def geocode(self, address: str) -> Optional[GeoLocation]:
        """Turn a free-text address into coordinates.

        Args:
            address: The address to look up (e.g., "10 rue de Rivoli").

        Returns:
            Coordinates of the best match, or None if not found.
        """
        ...
