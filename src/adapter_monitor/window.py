"""Fixed-capacity FIFO buffer of data points for charting."""

from collections import deque
from typing import Iterator, List, Optional, Tuple

from .constants import DEFAULT_CAPACITY
from .models import DataPoint


class RollingWindow:
    """Ordered data points, oldest first, never more than ``capacity`` of them."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Rolling window capacity must be at least 1, got {capacity}")
        self._points: deque = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def append(self, point: DataPoint) -> None:
        """Add a point, evicting the oldest one when full."""
        self._points.append(point)

    def clear(self) -> None:
        self._points.clear()

    def snapshot(self) -> Tuple[DataPoint, ...]:
        return tuple(self._points)

    def series(self, channel: str) -> List[Optional[float]]:
        """Values of one channel across the window, None where it was absent."""
        return [point.value(channel) for point in self._points]

    def channel_names(self) -> List[str]:
        """Every channel seen in the window, in order of first appearance."""
        names = {}
        for point in self._points:
            for name in point.series:
                names.setdefault(name, None)
        return list(names)

    @property
    def latest(self) -> Optional[DataPoint]:
        return self._points[-1] if self._points else None

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[DataPoint]:
        return iter(tuple(self._points))

    def __bool__(self) -> bool:
        return len(self._points) > 0
