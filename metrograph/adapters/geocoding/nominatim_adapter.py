"""Nominatim geocoder adapter.

This adapter turns free-text addresses into coordinates with:
- Caching via CachePort, misses included
- Configuration injection
- Rate limiting as required by the Nominatim usage policy
- Typed errors when the service itself fails
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from geopy.exc import GeocoderRateLimited, GeocoderServiceError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim

from ...config import GeocodingConfig, get_config
from ...domain.errors import GeocodingError
from ...domain.models import GeoLocation
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache


@dataclass
class NominatimGeocoderAdapter:
    """Nominatim geocoder adapter with caching and rate limiting.

    This adapter implements GeocoderPort using OpenStreetMap's Nominatim
    service. Addresses are completed with ``config.address_suffix`` so
    that "rue de Rivoli" resolves inside the served city.

    Attributes:
        config: Geocoding configuration
        cache: Cache for geocoding results
    """

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)
    cache: CachePort[Optional[GeoLocation]] = field(
        default_factory=lambda: InMemoryCache(name="geocode")
    )

    _geolocator: Optional[Nominatim] = field(default=None, repr=False)
    _geocode_fn: Optional[Any] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_geocoder(self) -> Any:
        """Get or initialize the geocoder with rate limiting."""
        if self._geocode_fn is not None:
            return self._geocode_fn

        self._logger.debug(
            "Initializing Nominatim geocoder",
            extra={
                "user_agent": self.config.user_agent,
                "timeout": self.config.timeout_seconds,
            },
        )

        self._geolocator = Nominatim(
            user_agent=self.config.user_agent,
            timeout=self.config.timeout_seconds,
        )

        self._geocode_fn = RateLimiter(
            self._geolocator.geocode,
            min_delay_seconds=self.config.rate_limit_delay,
            max_retries=self.config.max_retries,
            error_wait_seconds=self.config.error_wait_seconds,
            swallow_exceptions=False,
        )

        return self._geocode_fn

    def _query(self, address: str) -> str:
        suffix = self.config.address_suffix.strip()
        if suffix and suffix.lower() not in address.lower():
            return f"{address}, {suffix}"
        return address

    def geocode(self, address: str) -> Optional[GeoLocation]:
        """Geocode an address.

        Args:
            address: The address to geocode.

        Returns:
            Coordinates of the best match, or None if nothing matched.

        Raises:
            GeocodingError: If the geocoding service fails or rate limits us.
        """
        if not address or not address.strip():
            return None

        query = self._query(address.strip())
        cache_key = query.lower()

        if self.cache.contains(cache_key):
            self._logger.debug("Geocode cache hit", extra={"query": query})
            return self.cache.get(cache_key)

        try:
            geocode_fn = self._get_geocoder()
            location = geocode_fn(
                query,
                exactly_one=True,
                country_codes=self.config.country_codes or None,
            )
        except GeocoderServiceError as e:
            self._logger.warning(
                "Geocode service error",
                extra={"query": query, "error": str(e)},
            )
            raise GeocodingError(
                f"Geocoding failed for {address!r}",
                cause=e,
                query=address,
                is_rate_limited=isinstance(e, GeocoderRateLimited),
            )

        if location is None:
            self._logger.debug("Geocode returned no result", extra={"query": query})
            # Cache the miss to avoid repeated lookups
            self.cache.set(cache_key, None)
            return None

        result = GeoLocation(
            latitude=float(location.latitude),
            longitude=float(location.longitude),
        )
        self._logger.debug(
            "Geocode success",
            extra={"query": query, "lat": result.latitude, "lon": result.longitude},
        )
        self.cache.set(cache_key, result)
        return result
