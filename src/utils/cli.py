#!/usr/bin/env python3
"""Command-line interface for the network adapter dashboard (read-only)."""

import asyncio
import click
import json
import sys
from rich.live import Live

from ..adapter_monitor.catalog import AdapterCatalog, annotate_channel
from ..adapter_monitor.controller import PollingController
from ..adapter_monitor.constants import INTERFACE_VIEWS
from ..adapter_monitor.interfaces import InterfaceQueryError, collect_interfaces
from ..adapter_monitor.models import FailurePolicy
from ..adapter_monitor.parsers import parse_throughput_report
from ..powershell_client.client import PowerShellClient
from .logger import get_logger, suppress_console_logging
from .table_formatters import (
    console,
    build_monitor_view,
    format_adapters_grid,
    format_adapters_rich,
    format_interfaces_grid,
    format_interfaces_rich,
    format_throughput_grid,
    format_throughput_rich,
)

logger = get_logger(__name__)

@click.group()
@click.option('--powershell', 'executable', help='PowerShell executable (powershell or pwsh)')
@click.option('--timeout', type=float, help='Seconds before a PowerShell command is killed')
@click.option('--output', '-o', type=click.Choice(['table', 'grid', 'json']), default='table', help='Output format')
@click.pass_context
def cli(ctx, executable, timeout, output):
    """Network adapter and throughput dashboard (read-only)."""
    ctx.ensure_object(dict)

    ctx.obj['output_format'] = output
    ctx.obj['client'] = PowerShellClient(executable=executable, timeout=timeout)

@cli.command()
@click.pass_context
def adapters(ctx):
    """List the network adapters that are up."""
    catalog = AdapterCatalog(ctx.obj['client'].fetch_adapter_listing)
    if not asyncio.run(catalog.refresh()):
        click.echo(f"Error: {catalog.error}", err=True)
        sys.exit(1)

    output_format = ctx.obj['output_format']
    if output_format == 'json':
        click.echo(json.dumps(catalog.to_list(), indent=2))
    elif output_format == 'grid':
        click.echo(format_adapters_grid(catalog.adapters))
    else:
        click.echo(format_adapters_rich(catalog.adapters))

@cli.command()
@click.option('--view', type=click.Choice(INTERFACE_VIEWS), default='all',
              help='all interfaces, active (up, not loopback) or connected (active, host online)')
@click.option('--describe', is_flag=True, help='Fill descriptions from the PowerShell adapter listing')
@click.pass_context
def interfaces(ctx, view, describe):
    """List host network interfaces with their IP addresses."""
    descriptions = {}
    if describe:
        catalog = AdapterCatalog(ctx.obj['client'].fetch_adapter_listing)
        if asyncio.run(catalog.refresh()):
            descriptions = {adapter.name: adapter.description for adapter in catalog}
        else:
            logger.warning(f"Adapter descriptions unavailable: {catalog.error}")

    try:
        found = collect_interfaces(view, descriptions)
    except InterfaceQueryError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output_format = ctx.obj['output_format']
    if output_format == 'json':
        click.echo(json.dumps([iface.to_dict() for iface in found], indent=2))
    elif output_format == 'grid':
        click.echo(format_interfaces_grid(found))
    else:
        click.echo(format_interfaces_rich(found, view))

async def _collect_stats(client: PowerShellClient):
    catalog = AdapterCatalog(client.fetch_adapter_listing)
    report, _ = await asyncio.gather(client.fetch_throughput_report(), catalog.refresh())
    if catalog.error:
        logger.warning(f"Adapter types unavailable: {catalog.error}")
    return parse_throughput_report(report), catalog

@cli.command()
@click.pass_context
def stats(ctx):
    """Take one throughput sample of every network interface."""
    try:
        measurements, catalog = asyncio.run(_collect_stats(ctx.obj['client']))
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output_format = ctx.obj['output_format']
    if output_format == 'json':
        rows = []
        for measurement in measurements:
            label, _ = annotate_channel(catalog.adapters, measurement.name)
            rows.append({
                'name': measurement.name,
                'bytes_per_second': measurement.bytes_per_second,
                'type': label,
            })
        click.echo(json.dumps(rows, indent=2))
    elif output_format == 'grid':
        click.echo(format_throughput_grid(measurements, catalog.adapters))
    else:
        click.echo(format_throughput_rich(measurements, catalog.adapters))

async def run_monitor(client: PowerShellClient, interval_ms: int = None, capacity: int = None,
                      count: int = 0, failure_policy: str = None) -> PollingController:
    """Run the live view until ``count`` samples were taken or monitoring stops."""
    catalog = AdapterCatalog(client.fetch_adapter_listing)
    await catalog.refresh()

    controller = PollingController(
        client.fetch_throughput_report,
        interval_ms=interval_ms,
        capacity=capacity,
        failure_policy=failure_policy,
    )
    finished = asyncio.Event()

    with Live(build_monitor_view(controller.state, controller.data, catalog.adapters),
              console=console, refresh_per_second=4) as live:

        def on_change(ctrl: PollingController) -> None:
            live.update(build_monitor_view(ctrl.state, ctrl.data, catalog.adapters))
            if not ctrl.is_monitoring or (count and ctrl.poll_count >= count):
                finished.set()

        controller.subscribe(on_change)
        controller.start_monitoring()
        try:
            await finished.wait()
        finally:
            controller.stop_monitoring()

    return controller

@cli.command()
@click.option('--interval-ms', type=click.IntRange(min=1), help='Milliseconds between samples')
@click.option('--capacity', type=click.IntRange(min=1), help='Number of samples kept on screen')
@click.option('--count', type=click.IntRange(min=0), default=0, help='Stop after this many samples (0 = until Ctrl+C)')
@click.option('--failure-policy', type=click.Choice([p.value for p in FailurePolicy]),
              help='Keep polling after a failed sample (resilient) or stop (fail_fast)')
@click.pass_context
def watch(ctx, interval_ms, capacity, count, failure_policy):
    """Live throughput of every interface, refreshed each sample."""
    # Log lines would tear the live table
    suppress_console_logging()

    try:
        controller = asyncio.run(run_monitor(ctx.obj['client'], interval_ms, capacity, count, failure_policy))
    except KeyboardInterrupt:
        return

    if controller.last_error and controller.failure_policy is FailurePolicy.FAIL_FAST:
        click.echo(f"Error: {controller.last_error}", err=True)
        sys.exit(1)

if __name__ == '__main__':
    cli()
