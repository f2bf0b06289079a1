"""Confidence review flagging for classified tracking numbers."""

from typing import Iterable, Optional, Protocol

from ..models.enums import Carrier, Confidence


class Classified(Protocol):
    """Anything carrying a tracking number, carrier and confidence."""

    tracking_number: str
    carrier: Carrier
    confidence: Confidence


class ConfidenceValidator:
    """Flags MEDIUM-confidence matches for operator review."""

    def check_confidence(self, item: Classified) -> bool:
        """
        Check whether a classified item passed strict validation.

        Args:
            item: Parsed tracking number or batch entry.

        Returns:
            True for HIGH confidence, False when the item needs review.
        """
        return item.confidence is Confidence.HIGH

    def get_warning_message(self, item: Classified) -> Optional[str]:
        """
        Get review message for a MEDIUM-confidence item.

        Args:
            item: Parsed tracking number or batch entry.

        Returns:
            Review message if the item needs confirmation, None otherwise.
        """
        if self.check_confidence(item):
            return None
        if item.carrier is Carrier.UNKNOWN:
            return (
                f"REVIEW: '{item.tracking_number}' does not match a known "
                "carrier format, confirm manually"
            )
        return (
            f"REVIEW: '{item.tracking_number}' looks like {item.carrier.label} "
            "but failed strict validation, confirm manually"
        )

    def filter_needs_review(self, items: Iterable[Classified]) -> list:
        """
        Filter to only items that need review.

        Args:
            items: Classified items.

        Returns:
            Items with MEDIUM confidence, in input order.
        """
        return [item for item in items if not self.check_confidence(item)]

    @staticmethod
    def review_notice(count: int) -> Optional[str]:
        """Batch-level notice for newly added items that need review."""
        if count <= 0:
            return None
        noun = "number needs" if count == 1 else "numbers need"
        return f"{count} tracking {noun} format review."

    def get_summary(self, items: Iterable[Classified]) -> dict:
        """
        Get summary counts by confidence.

        Args:
            items: Classified items.

        Returns:
            Dictionary with high, medium, unknown_carrier and total_count.
        """
        items = list(items)
        high = sum(1 for item in items if item.confidence is Confidence.HIGH)
        unknown = sum(1 for item in items if item.carrier is Carrier.UNKNOWN)
        return {
            "high": high,
            "medium": len(items) - high,
            "unknown_carrier": unknown,
            "total_count": len(items),
        }
