"""
Data models for the adapter monitor.

Contains the dataclasses shared by the parsers, catalog and controller:
- AdapterRecord: One row of the adapter listing
- Measurement: One throughput line from a poll
- DataPoint: One time-stamped entry of the rolling window
- MonitoringState: Snapshot of the controller's lifecycle state
- FailurePolicy: What the controller does when a poll fails
- InterfaceInfo: One host network interface with its addresses
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class FailurePolicy(str, Enum):
    """Reaction to a failed poll."""

    # Keep monitoring, try again on the next tick
    RESILIENT = "resilient"
    # Cancel the timer and leave monitoring on the first failure
    FAIL_FAST = "fail_fast"

    @classmethod
    def from_value(cls, value) -> "FailurePolicy":
        """Accept an enum member or its configuration string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown failure policy '{value}', expected one of: "
                f"{', '.join(p.value for p in cls)}"
            ) from None


@dataclass(frozen=True)
class AdapterRecord:
    """A network adapter as reported by the adapter listing."""
    name: str
    description: str
    interface_index: int = 0
    link_speed: str = ""
    interface_type: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            'name': self.name,
            'description': self.description,
            'interface_index': self.interface_index,
            'link_speed': self.link_speed,
            'interface_type': self.interface_type,
        }


@dataclass(frozen=True)
class Measurement:
    """Throughput of one channel at one poll."""
    name: str
    bytes_per_second: float


@dataclass(frozen=True)
class DataPoint:
    """One entry of the rolling window.

    ``series`` maps channel name to bytes/sec. Channels can come and go
    between points; a missing key means "no value", not zero.
    """
    timestamp: str
    series: Dict[str, float] = field(default_factory=dict)

    def value(self, channel: str) -> Optional[float]:
        return self.series.get(channel)


@dataclass(frozen=True)
class MonitoringState:
    """Snapshot of the polling controller, safe to hand to readers."""
    is_monitoring: bool = False
    last_error: Optional[str] = None
    active_channel_names: Tuple[str, ...] = ()
    consecutive_errors: int = 0
    poll_count: int = 0


@dataclass(frozen=True)
class InterfaceInfo:
    """A network interface as seen by the operating system."""
    name: str
    description: str = ""
    is_up: bool = False
    is_loopback: bool = False
    ip_addresses: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            'name': self.name,
            'description': self.description,
            'is_up': self.is_up,
            'is_loopback': self.is_loopback,
            'ip_addresses': list(self.ip_addresses),
        }


def format_rate(bytes_per_second: float) -> str:
    """Format bytes per second to human readable string."""
    if bytes_per_second >= 1_073_741_824:
        return f"{bytes_per_second / 1_073_741_824:.2f} GB/s"
    elif bytes_per_second >= 1_048_576:
        return f"{bytes_per_second / 1_048_576:.2f} MB/s"
    elif bytes_per_second >= 1_024:
        return f"{bytes_per_second / 1_024:.2f} KB/s"
    else:
        return f"{bytes_per_second:.0f} B/s"
