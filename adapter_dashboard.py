#!/usr/bin/env python3
"""
Network Adapter Dashboard - adapter listing and live throughput for Windows hosts.

Queries PowerShell for the adapters that are up and for per-interface
Bytes Total/sec, and renders them in the terminal.

This is the entry point script. The implementation is in src/.
"""

from src.utils.cli import cli

if __name__ == "__main__":
    cli()
