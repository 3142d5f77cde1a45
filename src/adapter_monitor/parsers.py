"""Parsers for the raw text returned by the PowerShell collaborators.

Both parsers are tolerant: lines that do not fit the expected shape are
dropped rather than reported.

Usage Examples:
    from .parsers import parse_throughput_report, parse_catalog

    measurements = parse_throughput_report("Wi-Fi: 1536.00 bytes/sec")
    adapters = parse_catalog(csv_text)
"""

import re
from typing import List, Optional

from ..utils.logger import get_logger
from .constants import CATALOG_FIELDS_WITH_TYPE, CATALOG_FIELDS_WITHOUT_TYPE
from .models import AdapterRecord, Measurement

logger = get_logger(__name__)

# "<name>: <number> bytes/sec", name is everything before the first colon
THROUGHPUT_LINE = re.compile(r'^([^:]*):\s*([\d.]+)\s*bytes\s*/\s*sec', re.IGNORECASE)


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value)
    except ValueError:
        return None


def _to_int(value: str) -> int:
    """Parse an integer field, falling back to 0."""
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_throughput_report(raw: str) -> List[Measurement]:
    """
    Parse a line-oriented throughput report into measurements.

    Args:
        raw: Report text, one ``<name>: <value> bytes/sec`` entry per line

    Returns:
        Measurements in input order. Blank and non-matching lines are skipped.

    Example:
        >>> parse_throughput_report("eth0: 100 bytes/sec\\nnoise\\n")
        [Measurement(name='eth0', bytes_per_second=100.0)]
    """
    measurements = []
    for line in (raw or "").split("\n"):
        if not line.strip():
            continue

        match = THROUGHPUT_LINE.match(line.strip())
        if not match:
            logger.debug(f"Skipping unrecognised report line: {line!r}")
            continue

        value = _to_float(match.group(2))
        if value is None:
            # e.g. "1.2.3" satisfies the character class but is not a number
            logger.debug(f"Skipping report line with invalid number: {line!r}")
            continue

        measurements.append(Measurement(name=match.group(1).strip(), bytes_per_second=value))

    return measurements


def split_fields(line: str) -> List[str]:
    """
    Split one row of the adapter listing into cleaned fields.

    A quoted span counts as a single field even if it holds commas. Each
    field is trimmed and loses one leading and one trailing quote.
    """
    fields = []
    current = []
    in_quotes = False
    for char in line.rstrip("\r\n"):
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == ',' and not in_quotes:
            fields.append(''.join(current))
            current = []
        else:
            current.append(char)
    fields.append(''.join(current))

    return [_strip_quotes(value.strip()) for value in fields]


def _strip_quotes(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def parse_catalog(raw: str, include_type: bool = True) -> List[AdapterRecord]:
    """
    Parse the CSV adapter listing into adapter records.

    The first line is a header and is always discarded. Rows with fewer
    fields than the layout needs are dropped whole; unparseable index/type
    numbers become 0.

    Args:
        raw: Listing text as produced by ``ConvertTo-Csv``
        include_type: True for the 5-field layout with InterfaceType,
            False for the 4-field name/description/index/speed layout

    Returns:
        Adapter records in listing order
    """
    expected = CATALOG_FIELDS_WITH_TYPE if include_type else CATALOG_FIELDS_WITHOUT_TYPE
    lines = (raw or "").split("\n")

    records = []
    for line in lines[1:]:
        if not line.strip():
            continue

        values = split_fields(line)
        if len(values) < expected:
            logger.debug(f"Dropping adapter row with {len(values)} fields (need {expected}): {line!r}")
            continue

        records.append(AdapterRecord(
            name=values[0],
            description=values[1],
            interface_index=_to_int(values[2]),
            link_speed=values[3],
            interface_type=_to_int(values[4]) if include_type else 0,
        ))

    return records
