"""Pydantic model for a classified tracking-number candidate."""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Carrier, Confidence


_SEPARATOR_PATTERN = re.compile(r"[\s\-]")


class ParsedTrackingNumber(BaseModel):
    """One candidate tracking number found in the input text.

    Instances are immutable and created fresh on every extraction call.
    """

    tracking_number: str = Field(..., min_length=1, alias="trackingNumber")
    carrier: Carrier
    confidence: Confidence
    raw: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("tracking_number")
    @classmethod
    def validate_normalized(cls, v: str) -> str:
        """Require the normalized form: uppercase with no separators."""
        if _SEPARATOR_PATTERN.search(v):
            raise ValueError("tracking number must not contain spaces or hyphens")
        if v != v.upper():
            raise ValueError("tracking number must be uppercase")
        return v

    @property
    def needs_review(self) -> bool:
        """MEDIUM matches are shown to the operator for format review."""
        return self.confidence is Confidence.MEDIUM

    def to_dict(self) -> dict:
        """JSON-ready dict with camelCase keys and enum values."""
        return self.model_dump(mode="json", by_alias=True)

    def to_flat_dict(self) -> dict:
        """Convert to flat dictionary for CSV export."""
        return {
            "tracking_number": self.tracking_number,
            "carrier": self.carrier.value,
            "confidence": self.confidence.value,
            "raw": self.raw,
        }
