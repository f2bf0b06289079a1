"""Enumeration types for carrier classification and capture provenance."""

from enum import Enum
from typing import Optional


class Carrier(Enum):
    """Carriers recognized by the extractor.

    Member names are the stable identifiers; values are display labels.
    """

    UPS = "UPS"
    FEDEX = "FedEx"
    USPS = "USPS"
    DHL = "DHL"
    AMAZON_LOGISTICS = "Amazon Logistics"
    GS1_SSCC = "GS1 (SSCC)"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        """Human-readable carrier name."""
        return self.value

    @classmethod
    def from_text(cls, text: str) -> "Carrier | None":
        """Match carrier from a member name or display label (case-insensitive)."""
        if not text:
            return None
        wanted = text.strip().upper()
        for carrier in cls:
            if wanted in (carrier.name, carrier.value.upper()):
                return carrier
        return None


class Confidence(Enum):
    """Engine certainty that a match is a genuine tracking number."""

    HIGH = "high"
    MEDIUM = "medium"

    @classmethod
    def derive(cls, checksum_passed: Optional[bool], strict: bool = True) -> "Confidence":
        """
        Derive confidence from the validation outcome of a format.

        Args:
            checksum_passed: True/False when the format defines a check digit,
                None when it does not.
            strict: Whether the format has a fixed prefix and length.

        Returns:
            HIGH when the checksum passed, or when no checksum is defined and
            the format is strict. MEDIUM otherwise.
        """
        if checksum_passed is None:
            return cls.HIGH if strict else cls.MEDIUM
        return cls.HIGH if checksum_passed else cls.MEDIUM


class CaptureSource(Enum):
    """How a tracking number reached the receiving batch."""

    KEYBOARD = "keyboard"
    CAMERA = "camera"
    LABEL = "label"

    @classmethod
    def from_text(cls, text: str) -> "CaptureSource | None":
        """Match capture source from text."""
        if not text:
            return None
        wanted = text.strip().lower()
        for source in cls:
            if wanted in (source.value, source.name.lower()):
                return source
        return None
