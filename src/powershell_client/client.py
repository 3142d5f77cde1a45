"""Async client that runs the PowerShell scripts backing the dashboard (read-only)."""

import asyncio
from typing import List, Optional

from .exceptions import *
from ..adapter_monitor.constants import ADAPTER_LISTING_SCRIPT, THROUGHPUT_REPORT_SCRIPT
from ..utils.logger import get_logger, update_logger_command_context
from config.settings import settings

logger = get_logger(__name__)

class PowerShellClient:
    """Runs read-only PowerShell queries and returns their trimmed stdout."""

    def __init__(self, executable: str = None, timeout: float = None):
        """
        Initialize the PowerShell client.

        Args:
            executable: PowerShell binary (``powershell`` or ``pwsh``), defaults to settings
            timeout: Seconds before a command is killed, defaults to settings
        """
        self.executable = executable or settings.get('powershell.executable', 'powershell')
        self.timeout = timeout or settings.get('powershell.timeout', 30)

    def _build_args(self, script: str) -> List[str]:
        return [self.executable, '-NoProfile', '-NonInteractive', '-Command', script]

    async def run_script(self, script: str, command_name: Optional[str] = None) -> str:
        """
        Execute a PowerShell script and return its output.

        Raises:
            CommandNotFoundError: The executable could not be started
            CommandTimeoutError: The script ran past ``timeout``
            CommandFailedError: The script exited non-zero
            OutputDecodeError: stdout was not UTF-8
        """
        update_logger_command_context(logger, command_name or 'script')
        try:
            return await self._run(script)
        finally:
            update_logger_command_context(logger, 'idle')

    async def _run(self, script: str) -> str:
        args = self._build_args(script)
        logger.debug(f"Running PowerShell: {script[:80]}")

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as e:
            raise CommandNotFoundError(f"Failed to execute PowerShell: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise CommandTimeoutError(f"PowerShell script timed out after {self.timeout}s")

        if process.returncode != 0:
            error_text = stderr.decode('utf-8', errors='replace').strip()
            logger.warning(f"PowerShell exited with {process.returncode}: {error_text}")
            raise CommandFailedError(
                f"PowerShell script failed: {error_text}",
                return_code=process.returncode,
                stderr=error_text,
            )

        try:
            output = stdout.decode('utf-8')
        except UnicodeDecodeError as e:
            raise OutputDecodeError(f"Failed to parse output: {e}") from e

        return output.strip()

    async def fetch_adapter_listing(self) -> str:
        """CSV listing of the adapters that are up (header line first)."""
        return await self.run_script(ADAPTER_LISTING_SCRIPT, command_name='adapters')

    async def fetch_throughput_report(self) -> str:
        """One ``<instance>: <value> bytes/sec`` line per network interface counter."""
        return await self.run_script(THROUGHPUT_REPORT_SCRIPT, command_name='throughput')
