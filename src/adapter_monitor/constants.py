"""
Constants for the adapter monitor engine.
"""

from typing import Dict, Tuple

# Polling defaults (milliseconds / number of data points)
DEFAULT_INTERVAL_MS: int = 2000
DEFAULT_CAPACITY: int = 20

# Message stored in last_error when a throughput poll fails
POLL_ERROR_MESSAGE: str = "Failed to fetch network statistics"

# Interface type codes reported by Get-NetAdapter -> display category
INTERFACE_TYPES: Dict[int, str] = {
    6: "Ethernet",
    71: "WiFi",
    24: "Fast Ethernet",
    62: "WiMAX",
    151: "Cellular",
}

# Short glyphs shown next to a channel name, keyed by category
INTERFACE_ICONS: Dict[str, str] = {
    "Ethernet": "[=]",
    "Fast Ethernet": "[=]",
    "WiFi": "(~)",
    "WiMAX": "(^)",
    "Cellular": "|||",
}
UNKNOWN_ICON: str = "?"
UNKNOWN_TYPE_LABEL: str = "Unknown"

# Field counts for the two adapter listing layouts
CATALOG_FIELDS_WITH_TYPE: int = 5
CATALOG_FIELDS_WITHOUT_TYPE: int = 4

# PowerShell scripts run by the collaborator
ADAPTER_LISTING_SCRIPT: str = (
    "Get-NetAdapter | Where-Object Status -eq 'Up' | "
    "Select-Object Name, InterfaceDescription, ifIndex, LinkSpeed, InterfaceType | "
    "ConvertTo-Csv -NoTypeInformation"
)
THROUGHPUT_REPORT_SCRIPT: str = (
    "Get-Counter -Counter '\\Network Interface(*)\\Bytes Total/sec' "
    "-SampleInterval 1 -MaxSamples 1 | "
    "Select-Object -ExpandProperty CounterSamples | "
    "ForEach-Object { '{0}: {1:F2} bytes/sec' -f $_.InstanceName, $_.CookedValue }"
)

# Public DNS resolvers probed over TCP to decide whether the host is online
CONNECTIVITY_TARGETS: Tuple[Tuple[str, int], ...] = (
    ("8.8.8.8", 53),
    ("1.1.1.1", 53),
)
DEFAULT_CONNECTIVITY_TIMEOUT: float = 3.0

# Views offered by the interface listing
INTERFACE_VIEWS: Tuple[str, ...] = ("all", "active", "connected")
