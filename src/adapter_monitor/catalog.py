"""Known adapters: classification and the refreshable catalog holder."""

from typing import Awaitable, Callable, Iterable, List, Optional, Tuple

from ..utils.logger import get_logger
from .constants import INTERFACE_ICONS, INTERFACE_TYPES, UNKNOWN_ICON, UNKNOWN_TYPE_LABEL
from .matcher import match_adapter
from .models import AdapterRecord
from .parsers import parse_catalog

logger = get_logger(__name__)


def classify(interface_type: int) -> str:
    """Map an interface type code to its category, ``Type <n>`` when unknown."""
    return INTERFACE_TYPES.get(interface_type, f"Type {interface_type}")


def annotate_channel(catalog: Iterable[AdapterRecord], channel_name: str) -> Tuple[str, str]:
    """Return ``(type_label, icon)`` for display next to a throughput channel."""
    adapter = match_adapter(catalog, channel_name)
    if adapter is None:
        return UNKNOWN_TYPE_LABEL, UNKNOWN_ICON

    label = classify(adapter.interface_type)
    return label, INTERFACE_ICONS.get(label, UNKNOWN_ICON)


class AdapterCatalog:
    """Holds the adapter list from the most recent listing refresh.

    A refresh replaces the whole list or nothing. Callers serialize
    concurrent refreshes themselves.
    """

    def __init__(self, fetch_listing: Callable[[], Awaitable[str]], include_type: bool = True):
        self.fetch_listing = fetch_listing
        self.include_type = include_type
        self.adapters: Tuple[AdapterRecord, ...] = ()
        self.is_loading: bool = False
        self.error: Optional[str] = None

    async def refresh(self) -> bool:
        """Fetch and parse a new listing. Returns True when the catalog was replaced."""
        self.is_loading = True
        self.error = None
        try:
            raw = await self.fetch_listing()
            adapters = tuple(parse_catalog(raw, include_type=self.include_type))
        except Exception as e:
            logger.error(f"Failed to refresh adapter catalog: {e}")
            self.error = str(e) or e.__class__.__name__
            return False
        finally:
            self.is_loading = False

        self.adapters = adapters
        logger.info(f"Adapter catalog refreshed: {len(adapters)} adapters")
        return True

    def clear(self) -> None:
        """Forget all adapters and any refresh error."""
        self.adapters = ()
        self.error = None

    def find_by_name(self, name: str) -> Optional[AdapterRecord]:
        for adapter in self.adapters:
            if adapter.name == name:
                return adapter
        return None

    def type_label(self, name: str) -> str:
        """Category of the adapter with exactly this name, ``Unknown`` if absent."""
        adapter = self.find_by_name(name)
        if adapter is None:
            return UNKNOWN_TYPE_LABEL
        return classify(adapter.interface_type)

    def match(self, channel_name: str) -> Optional[AdapterRecord]:
        return match_adapter(self.adapters, channel_name)

    def annotate(self, channel_name: str) -> Tuple[str, str]:
        return annotate_channel(self.adapters, channel_name)

    def __len__(self) -> int:
        return len(self.adapters)

    def __iter__(self):
        return iter(self.adapters)

    def to_list(self) -> List[dict]:
        return [adapter.to_dict() for adapter in self.adapters]
