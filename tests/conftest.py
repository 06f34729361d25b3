# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

HEADER = "timestamp,temperature,condition,height,speed,direction,directionType,swells"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("SURFCAST_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
source_zone_offset_hours: 9
window_policy:
  type: fixed
  start: 2025-10-07
  end: 2025-10-09
cache_ttl_seconds: 60
request_timeout_seconds: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "surfcast.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_text() -> str:
    # 3 rows inside the 10/7-10/8 JST window, 1 row after it, out of order
    return "\n".join([
        HEADER,
        '2025-10-07 06:00:00,19.04,CLOUDY,0.55,18,280,cross,"[{""height"":0.9,""period"":10,""direction"":240}]"',
        '2025-10-07 03:00:00,18.6,CLEAR,0.42,14.4,270,offshore,"[{""height"":1.05,""period"":11.2,""direction"":250}]"',
        '2025-10-08 12:00:00,22.25,RAIN,0.30,37,90,onshore,[]',
        '2025-10-09 00:00:00,17.0,CLEAR,0.61,10,45,offshore,"[{""height"":1.4,""period"":12,""direction"":200}]"',
        "",
    ])


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    f = temp_workdir / "data" / "kitaizumi.csv"
    f.write_text(sample_csv_text, encoding="utf-8")
    return f
