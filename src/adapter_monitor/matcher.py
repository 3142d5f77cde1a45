"""Best-effort matching of throughput channel names to catalog adapters.

Performance counter instance names rarely equal the adapter's ``Name``
(``Intel[R] Wi-Fi 6 AX201 160MHz`` vs ``Wi-Fi``), so matching falls back to
the adapter description. Results only drive labels and icons.
"""

import re
from typing import Iterable, Optional

from .models import AdapterRecord

NON_ALPHANUMERIC = re.compile(r'[^a-z0-9]')


def normalize_name(value: str) -> str:
    """Lower-case and drop everything that is not an ASCII letter or digit."""
    return NON_ALPHANUMERIC.sub('', (value or '').lower())


def match_adapter(catalog: Iterable[AdapterRecord], channel_name: str) -> Optional[AdapterRecord]:
    """
    Find the adapter a throughput channel belongs to.

    Exact match on the normalized adapter name wins; otherwise the first
    adapter whose normalized description contains, or is contained in, the
    normalized channel name. Returns None when nothing matches.
    """
    adapters = list(catalog)
    target = normalize_name(channel_name)
    if not target:
        return None

    for adapter in adapters:
        if normalize_name(adapter.name) == target:
            return adapter

    for adapter in adapters:
        description = normalize_name(adapter.description)
        if description and (target in description or description in target):
            return adapter

    return None
