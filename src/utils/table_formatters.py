#!/usr/bin/env python3
"""
Rich and tabulate formatters for adapter dashboard output.
Provides colorful tables for the CLI and the live monitoring view.
"""

from typing import Iterable, List, Sequence
from rich.console import Console, Group
from rich.table import Table
from rich.panel import Panel
from rich import box
from tabulate import tabulate

from ..adapter_monitor.catalog import annotate_channel, classify
from ..adapter_monitor.models import AdapterRecord, DataPoint, InterfaceInfo, Measurement, MonitoringState, format_rate

console = Console()


def _render(items) -> str:
    with console.capture() as capture:
        for item in items:
            console.print(item)
            console.print()
    return capture.get()


def adapter_rows(adapters: Iterable[AdapterRecord]) -> List[List[str]]:
    return [
        [
            adapter.name,
            adapter.description,
            str(adapter.interface_index),
            adapter.link_speed,
            classify(adapter.interface_type),
        ]
        for adapter in adapters
    ]


ADAPTER_HEADERS = ['Name', 'Description', 'Index', 'Link Speed', 'Type']


def format_adapters_grid(adapters: Sequence[AdapterRecord]) -> str:
    """Plain grid table of adapters (tabulate)."""
    if not adapters:
        return "No adapters reported"
    return tabulate(adapter_rows(adapters), headers=ADAPTER_HEADERS, tablefmt='grid')


def format_adapters_rich(adapters: Sequence[AdapterRecord]) -> str:
    """Format the adapter catalog with Rich tables."""
    header = Panel(
        f"[bold white]Active Adapters: {len(adapters)}[/bold white]",
        style="bold blue",
        border_style="blue"
    )

    table = Table(
        title="[bold blue]Network Adapters[/bold blue]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Index", style="yellow", justify="right")
    table.add_column("Link Speed", style="green", justify="right")
    table.add_column("Type", style="magenta")

    for row in adapter_rows(adapters):
        table.add_row(*row)

    return _render([header, table])


def interface_rows(interfaces: Iterable[InterfaceInfo]) -> List[List[str]]:
    return [
        [
            iface.name,
            iface.description,
            "Up" if iface.is_up else "Down",
            "Yes" if iface.is_loopback else "No",
            "\n".join(iface.ip_addresses),
        ]
        for iface in interfaces
    ]


INTERFACE_HEADERS = ['Name', 'Description', 'Status', 'Loopback', 'IP Addresses']


def format_interfaces_grid(interfaces: Sequence[InterfaceInfo]) -> str:
    """Plain grid table of host interfaces (tabulate)."""
    if not interfaces:
        return "No network interfaces found"
    return tabulate(interface_rows(interfaces), headers=INTERFACE_HEADERS, tablefmt='grid')


def format_interfaces_rich(interfaces: Sequence[InterfaceInfo], view: str = "all") -> str:
    """Format host interfaces with Rich tables."""
    table = Table(
        title=f"[bold blue]Network Interfaces ({view}): {len(interfaces)}[/bold blue]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Status", justify="center")
    table.add_column("Loopback", style="dim", justify="center")
    table.add_column("IP Addresses", style="green")

    for row in interface_rows(interfaces):
        status = "[green]Up[/green]" if row[2] == "Up" else "[red]Down[/red]"
        table.add_row(row[0], row[1], status, row[3], row[4])

    return _render([table])


def throughput_rows(measurements: Iterable[Measurement], adapters: Sequence[AdapterRecord]) -> List[List[str]]:
    rows = []
    for measurement in measurements:
        label, icon = annotate_channel(adapters, measurement.name)
        rows.append([f"{icon} {measurement.name}", label, format_rate(measurement.bytes_per_second)])
    return rows


THROUGHPUT_HEADERS = ['Channel', 'Type', 'Throughput']


def format_throughput_grid(measurements: Sequence[Measurement], adapters: Sequence[AdapterRecord]) -> str:
    """Plain grid table of one throughput report (tabulate)."""
    if not measurements:
        return "No throughput channels reported"
    return tabulate(throughput_rows(measurements, adapters), headers=THROUGHPUT_HEADERS, tablefmt='grid')


def format_throughput_rich(measurements: Sequence[Measurement], adapters: Sequence[AdapterRecord]) -> str:
    """Format one throughput report with Rich tables."""
    table = Table(
        title="[bold green]Interface Throughput[/bold green]",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Channel", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Throughput", style="green", justify="right")

    for row in throughput_rows(measurements, adapters):
        table.add_row(*row)

    return _render([table])


def build_monitor_view(state: MonitoringState, points: Sequence[DataPoint],
                       adapters: Sequence[AdapterRecord]) -> Group:
    """Renderable for the live monitor: status line plus one column per channel."""
    if state.last_error:
        status = f"[bold red]Error:[/bold red] [red]{state.last_error}[/red]"
    elif state.is_monitoring:
        status = f"[bold #56d364]Monitoring[/bold #56d364] [dim]| Samples:[/dim] {state.poll_count}"
    else:
        status = "[bold yellow]Stopped[/bold yellow]"

    table = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="bold cyan")
    table.add_column("Time", style="dim", no_wrap=True)

    channels = list(state.active_channel_names)
    for point in points:
        for name in point.series:
            if name not in channels:
                channels.append(name)

    for name in channels:
        label, icon = annotate_channel(adapters, name)
        table.add_column(f"{icon} {name}\n[dim]{label}[/dim]", justify="right")

    for point in points:
        cells = []
        for name in channels:
            value = point.value(name)
            cells.append("-" if value is None else format_rate(value))
        table.add_row(point.timestamp, *cells)

    return Group(Panel(status, border_style="blue"), table)
