"""Shared fixtures for diskscope tests."""

from pathlib import Path

import pytest


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _write_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Never read the real user settings file."""
    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("DISKSCOPE_CONFIG", str(config_dir / "config.json"))
    return config_dir / "config.json"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def write_file():
    """Create a file of the given size, parents included."""
    return _write_file


@pytest.fixture
def data_root(tmp_path):
    """
    data/
      photos/   3 files, 500000 bytes
      readme.txt  50 bytes
    """
    root = tmp_path / "data"
    _write_file(root / "photos" / "a.jpg", 200_000)
    _write_file(root / "photos" / "b.jpg", 200_000)
    _write_file(root / "photos" / "c.jpg", 100_000)
    _write_file(root / "readme.txt", 50)
    return root
