"""Pytest fixtures for the network adapter dashboard tests."""

import asyncio
import pytest
from pathlib import Path
from typing import List


def pytest_configure(config):
    """Register custom pytest marks."""
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: Slow running tests"
    )
    config.addinivalue_line(
        "markers", "mock: Mock tests"
    )

# Add the project root to the Python path
import sys
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


async def settle(rounds: int = 20) -> None:
    """Let every ready task on the loop run to its next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeClock:
    """Stand-in for asyncio.sleep: sleepers only wake when the test advances time."""

    def __init__(self):
        self.sleepers: List[asyncio.Future] = []
        self.sleep_calls: List[float] = []

    async def sleep(self, seconds: float) -> None:
        self.sleep_calls.append(seconds)
        future = asyncio.get_running_loop().create_future()
        self.sleepers.append(future)
        await future

    async def advance(self, ticks: int = 1) -> None:
        """Pass ``ticks`` interval boundaries, settling the loop after each."""
        for _ in range(ticks):
            sleepers, self.sleepers = self.sleepers, []
            for future in sleepers:
                if not future.done():
                    future.set_result(None)
            await settle()


class ScriptedFetch:
    """Collaborator that answers from a list; Exception items are raised."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        item = self.responses.pop(0) if self.responses else ""
        if isinstance(item, Exception):
            raise item
        return item


class GatedFetch:
    """Collaborator whose calls block until the test releases them."""

    def __init__(self, response: str = "eth0: 100 bytes/sec"):
        self.response = response
        self.calls = 0
        self._gate = None

    def _event(self) -> asyncio.Event:
        if self._gate is None:
            self._gate = asyncio.Event()
        return self._gate

    async def __call__(self) -> str:
        self.calls += 1
        await self._event().wait()
        return self.response

    def release(self) -> None:
        self._event().set()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def sample_adapter_listing():
    """Adapter listing as produced by Get-NetAdapter | ConvertTo-Csv."""
    return (
        '"Name","InterfaceDescription","ifIndex","LinkSpeed","InterfaceType"\r\n'
        '"Ethernet","Intel(R) Ethernet Connection (7) I219-V","12","1 Gbps","6"\r\n'
        '"Wi-Fi","Intel(R) Wi-Fi 6 AX201 160MHz","7","866.7 Mbps","71"\r\n'
        '"Cellular","Qualcomm Snapdragon X20 LTE, Modem","21","150 Mbps","151"'
    )


@pytest.fixture
def sample_throughput_report():
    """Throughput report as produced by Get-Counter."""
    return (
        "intel[r] ethernet connection (7) i219-v: 2048.00 bytes/sec\n"
        "intel[r] wi-fi 6 ax201 160mhz: 51200.50 bytes/sec\n"
        "isatap.{1d2c}: 0.00 bytes/sec"
    )
