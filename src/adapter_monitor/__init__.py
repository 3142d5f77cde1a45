"""
Adapter Monitor - polling, parsing and rolling-window engine for the network dashboard.

Polls a throughput report on a timer, keeps a bounded time series for charting
and classifies throughput channels against the known adapter catalog.
"""

from .models import (
    AdapterRecord,
    Measurement,
    DataPoint,
    MonitoringState,
    FailurePolicy,
    InterfaceInfo,
    format_rate,
)
from .parsers import parse_throughput_report, parse_catalog
from .catalog import AdapterCatalog, classify, annotate_channel
from .matcher import match_adapter, normalize_name
from .window import RollingWindow
from .controller import PollingController
from .interfaces import (
    InterfaceQueryError,
    check_internet_connectivity,
    collect_interfaces,
    list_active_interfaces,
    list_all_interfaces,
    list_internet_connected_interfaces,
)
from .constants import DEFAULT_CAPACITY, DEFAULT_INTERVAL_MS

__all__ = [
    # Engine
    "PollingController",
    "RollingWindow",
    "AdapterCatalog",
    # Parsing and matching
    "parse_throughput_report",
    "parse_catalog",
    "classify",
    "annotate_channel",
    "match_adapter",
    "normalize_name",
    # Host interfaces
    "list_all_interfaces",
    "list_active_interfaces",
    "list_internet_connected_interfaces",
    "check_internet_connectivity",
    "collect_interfaces",
    "InterfaceQueryError",
    # Models
    "AdapterRecord",
    "Measurement",
    "DataPoint",
    "MonitoringState",
    "FailurePolicy",
    "InterfaceInfo",
    "format_rate",
    # Constants
    "DEFAULT_CAPACITY",
    "DEFAULT_INTERVAL_MS",
]
