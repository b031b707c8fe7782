"""Pytest fixtures for server module testing."""

import queue
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from server import broadcaster
from telemetry.config import MonitorConfig
from telemetry.lidar import Scan


class ControlledSource:
    """Telemetry source fed by the test; ``None`` ends the stream."""

    def __init__(self) -> None:
        self.gps_queue: queue.Queue[str | None] = queue.Queue()
        self.scan_queue: queue.Queue[Scan | None] = queue.Queue()

    def read_gps(self) -> str:
        item = self.gps_queue.get()
        if item is None:
            raise EOFError("test source closed")
        return item

    def read_scan(self) -> Scan:
        item = self.scan_queue.get()
        if item is None:
            raise EOFError("test source closed")
        return item

    def close(self) -> None:
        self.gps_queue.put(None)
        self.scan_queue.put(None)


@pytest.fixture(autouse=True)
def controlled_source() -> Iterator[ControlledSource]:
    source = ControlledSource()
    config = MonitorConfig(update_interval_seconds=0.01)
    broadcaster.reset()
    with (
        patch("server.main.load_config", return_value=config),
        patch("server.main._create_source", return_value=source),
    ):
        yield source
    source.close()
    broadcaster.reset()
