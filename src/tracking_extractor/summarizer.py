"""Carrier-mix summary for a set of classified tracking numbers."""

from collections import Counter
from typing import Any, Iterable, List, Tuple, Union

from .models.enums import Carrier


def _resolve_carrier(value: Union[Carrier, str, None]) -> Carrier:
    if isinstance(value, Carrier):
        return value
    if isinstance(value, str):
        return Carrier.from_text(value) or Carrier.UNKNOWN
    return Carrier.UNKNOWN


def count_carriers(entries: Iterable[Any]) -> List[Tuple[Carrier, int]]:
    """
    Count entries per carrier.

    Args:
        entries: Items exposing a ``carrier`` attribute, either a Carrier or
            its name/label as a string.

    Returns:
        (Carrier, count) pairs, most frequent first, ties by label.
    """
    counts = Counter(_resolve_carrier(getattr(entry, "carrier", None)) for entry in entries)
    return sorted(counts.items(), key=lambda item: (-item[1], item[0].label))


def summarize_carrier_mix(entries: Iterable[Any]) -> str:
    """
    Describe the carrier mix of a batch.

    Example:
        [UPS, UPS, USPS] -> "UPS × 2, USPS × 1"

    Returns:
        Comma-separated "label × count" parts, or "" for no entries.
    """
    return ", ".join(
        f"{carrier.label} × {count}" for carrier, count in count_carriers(entries)
    )
