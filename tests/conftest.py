"""Shared fixtures: small graphs and a tiny metro network on disk."""

from pathlib import Path

import pytest

from metrograph.config import GraphConfig, reset_config
from metrograph.graph import Graph

STATIONS_CSV = """station_id,line,name,longitude,latitude,commune,insee
0,1,Louvre - Rivoli,2.340917,48.860855,Paris,75101
1,1,Châtelet,2.347420,48.858420,Paris,75101
2,1,Hôtel de Ville,2.352201,48.857322,Paris,75104
3,1,Bastille,2.369164,48.853202,Paris,75112
4,14,Pyramides,2.334626,48.865705,Paris,75101
5,14,Châtelet,2.347045,48.859349,Paris,75101
"""

LINKS_CSV = """station_id,previous_id,next_id
0,,1
1,0,2
2,1,3
3,2,
4,,5
5,4,
"""

TRANSFERS_CSV = """from_station_id,to_station_id,minutes
1,5,4.0
"""


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def network_dir(tmp_path: Path) -> Path:
    (tmp_path / "stations.csv").write_text(STATIONS_CSV, encoding="utf-8")
    (tmp_path / "links.csv").write_text(LINKS_CSV, encoding="utf-8")
    (tmp_path / "transfers.csv").write_text(TRANSFERS_CSV, encoding="utf-8")
    return tmp_path


@pytest.fixture
def graph_config(network_dir: Path) -> GraphConfig:
    return GraphConfig(data_dir=network_dir)


@pytest.fixture
def abcd() -> Graph:
    # A-B(1), B-C(2), A-C(4), C-D(1), all undirected
    return Graph.from_payloads(
        {
            "A": {"B": 1.0, "C": 4.0},
            "B": {"A": 1.0, "C": 2.0},
            "C": {"A": 4.0, "B": 2.0, "D": 1.0},
            "D": {"C": 1.0},
        }
    )


@pytest.fixture
def triangle() -> Graph:
    return Graph.from_payloads(
        {
            "A": {"B": 1.0, "C": 1.0},
            "B": {"A": 1.0, "C": 1.0},
            "C": {"A": 1.0, "B": 1.0},
        }
    )


@pytest.fixture
def two_cycles() -> Graph:
    # 0 -> 1 -> 2 -> 0 and 3 <-> 4, joined by 2 -> 3
    return Graph.from_adjacency_list(
        {
            0: {1: 1.0},
            1: {2: 1.0},
            2: {0: 1.0, 3: 1.0},
            3: {4: 1.0},
            4: {3: 1.0},
        }
    )
