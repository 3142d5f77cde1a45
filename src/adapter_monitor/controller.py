"""
Polling controller for live adapter throughput.

Drives a single asyncio timer that asks the throughput collaborator for a
report every interval, folds each report into the rolling window and keeps
the monitoring state (running flag, last error, active channels) current.

Contains:
- PollingController: Start/stop lifecycle, ticks, state snapshots and subscriptions
"""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Tuple

from config.settings import settings

from ..utils.logger import get_logger, update_logger_command_context
from .constants import DEFAULT_CAPACITY, DEFAULT_INTERVAL_MS, POLL_ERROR_MESSAGE
from .models import DataPoint, FailurePolicy, MonitoringState
from .parsers import parse_throughput_report
from .window import RollingWindow

logger = get_logger(__name__)

Subscriber = Callable[["PollingController"], None]


class PollingController:
    """Owns the monitoring lifecycle and the rolling window.

    Only the controller writes its state. Readers get immutable snapshots
    through ``state``/``data`` or by subscribing to change notifications.

    At most one call to ``fetch_report`` is outstanding at any time; a tick
    that fires while a call is still running is skipped, not queued. A call
    still running when monitoring stops is left to finish and its result is
    thrown away.
    """

    def __init__(self, fetch_report: Callable[[], Awaitable[str]],
                 interval_ms: int = None, capacity: int = None,
                 failure_policy=None,
                 sleep: Callable[[float], Awaitable[None]] = None,
                 clock: Callable[[], datetime] = None):
        """
        Initialize the controller.

        Args:
            fetch_report: Async callable returning the raw throughput report
            interval_ms: Default tick interval, falls back to settings
            capacity: Default rolling window size, falls back to settings
            failure_policy: FailurePolicy or its name, falls back to settings
            sleep: Timer primitive, asyncio.sleep unless overridden
            clock: Source of wall-clock time for data point labels
        """
        self.fetch_report = fetch_report
        self.interval_ms = interval_ms if interval_ms is not None else settings.get('monitoring.interval_ms', DEFAULT_INTERVAL_MS)
        self.capacity = capacity if capacity is not None else settings.get('monitoring.capacity', DEFAULT_CAPACITY)
        self.failure_policy = FailurePolicy.from_value(
            failure_policy or settings.get('monitoring.failure_policy', FailurePolicy.RESILIENT.value)
        )
        self._sleep = sleep or asyncio.sleep
        self._clock = clock or datetime.now

        self.window = RollingWindow(self.capacity)
        self.is_monitoring: bool = False
        self.last_error: Optional[str] = None
        self.active_channel_names: Tuple[str, ...] = ()
        self.consecutive_errors: int = 0
        self.poll_count: int = 0
        self.skipped_ticks: int = 0

        self._timer: Optional[asyncio.Task] = None
        self._in_flight: Optional[asyncio.Task] = None
        self._session: int = 0
        self._subscribers: List[Subscriber] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_monitoring(self, interval_ms: int = None, capacity: int = None) -> None:
        """Start polling. Does nothing if already monitoring.

        Must be called from a running event loop.
        """
        if self.is_monitoring:
            logger.debug("start_monitoring called while already monitoring, ignoring")
            return

        loop = asyncio.get_running_loop()

        interval_ms = interval_ms if interval_ms is not None else self.interval_ms
        capacity = capacity if capacity is not None else self.capacity
        if interval_ms <= 0:
            raise ValueError(f"Polling interval must be positive, got {interval_ms} ms")

        window = RollingWindow(capacity)

        self.interval_ms = interval_ms
        self.capacity = capacity
        self.window = window
        self.active_channel_names = ()
        self.last_error = None
        self.consecutive_errors = 0
        self.poll_count = 0
        self.skipped_ticks = 0

        self._session += 1
        self.is_monitoring = True
        self._timer = loop.create_task(self._run_timer(self._session))

        logger.info(f"Monitoring started: interval={interval_ms}ms, capacity={capacity}, "
                    f"failure_policy={self.failure_policy.value}")
        self._notify()

    def stop_monitoring(self) -> None:
        """Cancel the timer and leave monitoring. Keeps the collected history."""
        if not self.is_monitoring:
            return

        self.is_monitoring = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        logger.info(f"Monitoring stopped after {self.poll_count} polls")
        self._notify()

    def clear(self) -> None:
        """Drop history, active channels and the last error."""
        self.window.clear()
        self.active_channel_names = ()
        self.last_error = None
        self.consecutive_errors = 0
        self._notify()

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def _run_timer(self, session: int) -> None:
        interval = self.interval_ms / 1000
        while self._is_current(session):
            await self._sleep(interval)
            if not self._is_current(session):
                break
            self.tick()

    def tick(self) -> Optional[asyncio.Task]:
        """Run one polling cycle.

        Returns the task performing the call, or None when the tick was
        skipped (not monitoring, or the previous call has not finished).
        """
        if not self.is_monitoring:
            return None

        if self._in_flight is not None and not self._in_flight.done():
            self.skipped_ticks += 1
            logger.debug("Previous poll still running, skipping tick")
            return None

        self._in_flight = asyncio.get_running_loop().create_task(self._poll(self._session))
        return self._in_flight

    async def _poll(self, session: int) -> None:
        update_logger_command_context(logger, 'throughput')
        try:
            raw = await self.fetch_report()
        except Exception as e:
            if not self._is_current(session):
                logger.debug(f"Discarding failure from stopped session: {e}")
                return
            self._record_failure(e)
            return
        finally:
            update_logger_command_context(logger, 'idle')

        if not self._is_current(session):
            logger.debug("Discarding poll result that arrived after monitoring stopped")
            return

        self._record_success(raw)

    def _record_success(self, raw: str) -> None:
        measurements = parse_throughput_report(raw)

        names = tuple(m.name for m in measurements)
        if names != self.active_channel_names:
            logger.debug(f"Active channels changed: {list(names)}")
            self.active_channel_names = names

        series = {m.name: m.bytes_per_second for m in measurements}
        label = self._clock().strftime('%X')
        self.window.append(DataPoint(timestamp=label, series=series))

        self.poll_count += 1
        self.last_error = None
        self.consecutive_errors = 0
        self._notify()

    def _record_failure(self, error: Exception) -> None:
        self.consecutive_errors += 1
        self.last_error = POLL_ERROR_MESSAGE
        logger.warning(f"Poll failed ({self.consecutive_errors} consecutive): {error}")

        if self.failure_policy is FailurePolicy.FAIL_FAST:
            logger.error("Stopping monitoring after poll failure (fail_fast policy)")
            self.stop_monitoring()
        else:
            self._notify()

    def _is_current(self, session: int) -> bool:
        return self.is_monitoring and session == self._session

    async def wait_idle(self) -> None:
        """Wait for an outstanding collaborator call, if any, to finish."""
        if self._in_flight is not None and not self._in_flight.done():
            await asyncio.wait([self._in_flight])

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    @property
    def in_flight(self) -> bool:
        return self._in_flight is not None and not self._in_flight.done()

    @property
    def state(self) -> MonitoringState:
        return MonitoringState(
            is_monitoring=self.is_monitoring,
            last_error=self.last_error,
            active_channel_names=self.active_channel_names,
            consecutive_errors=self.consecutive_errors,
            poll_count=self.poll_count,
        )

    @property
    def data(self) -> Tuple[DataPoint, ...]:
        return self.window.snapshot()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback(controller)`` after every state change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception:
                logger.exception("State subscriber raised")
