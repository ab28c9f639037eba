import os
import sys
from pathlib import Path

import pytest

# Add src to pythonpath
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src")))

from climate_summary.config import Settings  # noqa: E402

TN_LINES = [
    "TN\t1422770400000\tdn2dcstxsf5b\t23.0\t0.0\t100.0\t0.0\t100576.0\t277.8087\n",
    "TN\t1424325600000\tdn20t1kz0xrz\t67.0\t0.0\t0.0\t0.0\t101872.0\t262.5665\n",
]

WA_LINES = [
    "WA\t1435510800000\tc23nb62w20sp\t31.0\t0.0\t0.0\t1.0\t99860.0\t325.2\n",
    "WA\t1451448000000\tc22yzvh3dfs4\t88.0\t1.0\t100.0\t0.0\t102380.0\t245.0\n",
    "WA\t1440000000000\tc23p8x7kzqf2\t52.0\t0.0\t45.0\t0.0\t101020.0\t290.0\n",
]


def make_line(
    code: str = "CA",
    timestamp_ms: int = 1428300000000,
    humidity: float = 50.0,
    snow: float = 0.0,
    cloud: float = 0.0,
    lightning: float = 0.0,
    pressure: float = 101325.0,
    kelvin: float = 273.15,
) -> str:
    """Build one TDV record."""
    fields = [code, timestamp_ms, "9prcjqk3yc80", humidity, snow, cloud, lightning, pressure, kelvin]
    return "\t".join(str(f) for f in fields) + "\n"


@pytest.fixture
def tn_lines() -> list[str]:
    return list(TN_LINES)


@pytest.fixture
def wa_lines() -> list[str]:
    return list(WA_LINES)


@pytest.fixture
def tdv_file(tmp_path):
    """Factory writing lines into a temporary .tdv file."""

    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("".join(lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def test_settings(tmp_path, monkeypatch) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    for key in list(os.environ):
        if key.startswith("CLIMATE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return Settings()


@pytest.fixture
def line_factory():
    return make_line
