import logging

import pytest
from pydantic import ValidationError

from metrograph.config import (
    AppConfig,
    GraphConfig,
    ObservabilityConfig,
    RoutingConfig,
    get_config,
    reset_config,
)
from metrograph.observability import JsonFormatter, configure_logging


def test_defaults():
    config = get_config()

    assert config.routing.max_all_pairs_order == 500
    assert config.geocoding.address_suffix == "Paris, France"
    assert config.graph.stations_path.name == "stations.csv"
    assert config.graph.stations_path.parent == config.project_root / "data"


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("METRO_ROUTING_MAX_ALL_PAIRS_ORDER", "800")
    monkeypatch.setenv("METRO_GRAPH_DATA_DIR", str(tmp_path))
    reset_config()

    config = get_config()

    assert config.routing.max_all_pairs_order == 800
    assert config.graph.links_path == tmp_path / "links.csv"


def test_bounds_are_validated():
    with pytest.raises(ValidationError):
        RoutingConfig(max_all_pairs_order=0)


def test_graph_paths(tmp_path):
    config = GraphConfig(data_dir=tmp_path, transfers_file="walks.csv")

    assert config.transfers_path == tmp_path / "walks.csv"


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_plain(restore_root_logger):
    configure_logging(ObservabilityConfig(level="debug"))

    assert restore_root_logger.level == logging.DEBUG
    assert not isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
    assert logging.getLogger("geopy").level == logging.WARNING


def test_configure_logging_structured(restore_root_logger):
    configure_logging(ObservabilityConfig(structured=True))

    assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {"name": "metrograph", "levelname": "INFO", "msg": "Route found", "stops": 4}
    )

    output = JsonFormatter().format(record)

    assert '"message": "Route found"' in output
    assert '"stops": 4' in output
    assert '"logger": "metrograph"' in output


def test_app_config_nests_sections():
    config = AppConfig()

    assert isinstance(config.routing, RoutingConfig)
