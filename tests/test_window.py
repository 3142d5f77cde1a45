"""Tests for the rolling window and data point models."""

import pytest

from src.adapter_monitor.models import DataPoint, FailurePolicy, format_rate
from src.adapter_monitor.window import RollingWindow


def _point(i, **series):
    return DataPoint(timestamp=f"12:00:{i:02d}", series=series or {'eth0': float(i)})


class TestRollingWindow:
    """Test cases for RollingWindow."""

    @pytest.mark.unit
    def test_never_exceeds_capacity(self):
        """Appending capacity+5 points keeps the newest capacity points in order."""
        window = RollingWindow(capacity=4)
        for i in range(9):
            window.append(_point(i))

        assert len(window) == 4
        assert [p.timestamp for p in window] == ["12:00:05", "12:00:06", "12:00:07", "12:00:08"]

    @pytest.mark.unit
    def test_below_capacity_keeps_everything(self):
        """No eviction happens until the window is full."""
        window = RollingWindow(capacity=20)
        for i in range(3):
            window.append(_point(i))

        assert len(window) == 3
        assert window.latest.timestamp == "12:00:02"

    @pytest.mark.unit
    def test_invalid_capacity(self):
        """Capacity must be positive."""
        with pytest.raises(ValueError):
            RollingWindow(capacity=0)

    @pytest.mark.unit
    def test_series_reports_missing_channels_as_none(self):
        """Channels absent from a point are None, not zero."""
        window = RollingWindow(capacity=5)
        window.append(_point(0, eth0=1.0))
        window.append(_point(1, wlan0=2.0))
        window.append(_point(2, eth0=3.0, wlan0=4.0))

        assert window.series('eth0') == [1.0, None, 3.0]
        assert window.series('wlan0') == [None, 2.0, 4.0]
        assert window.channel_names() == ['eth0', 'wlan0']

    @pytest.mark.unit
    def test_snapshot_is_detached(self):
        """Snapshots do not change when the window does."""
        window = RollingWindow(capacity=2)
        window.append(_point(0))
        snapshot = window.snapshot()
        window.append(_point(1))
        window.append(_point(2))

        assert [p.timestamp for p in snapshot] == ["12:00:00"]

    @pytest.mark.unit
    def test_clear(self):
        """clear() empties the window but keeps its capacity."""
        window = RollingWindow(capacity=3)
        window.append(_point(0))
        window.clear()

        assert len(window) == 0
        assert not window
        assert window.latest is None
        assert window.capacity == 3


class TestModels:
    """Test cases for model helpers."""

    @pytest.mark.unit
    def test_failure_policy_from_value(self):
        """Policies parse from their configuration names."""
        assert FailurePolicy.from_value("resilient") is FailurePolicy.RESILIENT
        assert FailurePolicy.from_value(" FAIL_FAST ") is FailurePolicy.FAIL_FAST
        assert FailurePolicy.from_value(FailurePolicy.FAIL_FAST) is FailurePolicy.FAIL_FAST

    @pytest.mark.unit
    def test_failure_policy_rejects_unknown(self):
        """Unknown policy names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown failure policy"):
            FailurePolicy.from_value("retry_forever")

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        (0, "0 B/s"),
        (512, "512 B/s"),
        (2048, "2.00 KB/s"),
        (5 * 1_048_576, "5.00 MB/s"),
        (1_073_741_824, "1.00 GB/s"),
    ])
    def test_format_rate(self, value, expected):
        """Rates are scaled to the largest fitting unit."""
        assert format_rate(value) == expected
