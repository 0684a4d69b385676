"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- METRO_GRAPH_DATA_DIR=/path/to/data
- METRO_GEO_USER_AGENT=my-router
- METRO_ROUTING_MAX_ALL_PAIRS_ORDER=800
- METRO_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphConfig(BaseSettings):
    """Station network data configuration.

    Environment variables prefixed with METRO_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_GRAPH_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    stations_file: str = "stations.csv"
    links_file: str = "links.csv"
    transfers_file: str = "transfers.csv"

    @property
    def stations_path(self) -> Path:
        """Full path to the stations CSV file."""
        return self.data_dir / self.stations_file

    @property
    def links_path(self) -> Path:
        """Full path to the line links CSV file."""
        return self.data_dir / self.links_file

    @property
    def transfers_path(self) -> Path:
        """Full path to the transfers CSV file."""
        return self.data_dir / self.transfers_file


class GeocodingConfig(BaseSettings):
    """Geocoding configuration.

    Environment variables prefixed with METRO_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_GEO_")

    user_agent: str = "metrograph"
    timeout_seconds: int = 10
    rate_limit_delay: float = 1.0
    max_retries: int = 2
    error_wait_seconds: float = 2.0
    address_suffix: str = "Paris, France"
    country_codes: str = "fr"


class RoutingConfig(BaseSettings):
    """Routing limits.

    Environment variables prefixed with METRO_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_ROUTING_")

    max_all_pairs_order: int = Field(default=500, ge=1)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with METRO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.graph.stations_path)
        print(config.routing.max_all_pairs_order)

    Environment variables prefixed with METRO_.
    """

    model_config = SettingsConfigDict(env_prefix="METRO_")

    graph: GraphConfig = Field(default_factory=GraphConfig)
    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
