"""Pydantic models for receiving-batch entries and the submission payload."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .enums import Carrier, Confidence, CaptureSource
from .tracking import ParsedTrackingNumber


class BatchEntry(BaseModel):
    """A tracking number collected into a receiving batch, plus operator metadata."""

    tracking_number: str = Field(..., min_length=1)
    carrier: Carrier
    confidence: Confidence
    source: CaptureSource
    notes: str = ""
    raw_input: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_parsed(
        cls, parsed: ParsedTrackingNumber, source: CaptureSource
    ) -> "BatchEntry":
        """Create entry from an extraction result."""
        return cls(
            tracking_number=parsed.tracking_number,
            carrier=parsed.carrier,
            confidence=parsed.confidence,
            source=source,
            raw_input=parsed.raw,
        )

    def with_notes(self, notes: str) -> "BatchEntry":
        """Return a copy carrying new operator notes."""
        return self.model_copy(update={"notes": notes or ""})

    @property
    def needs_review(self) -> bool:
        return self.confidence is Confidence.MEDIUM

    def to_dict(self) -> dict:
        """JSON-ready dict with camelCase keys and enum values."""
        return {
            "trackingNumber": self.tracking_number,
            "carrier": self.carrier.value,
            "confidence": self.confidence.value,
            "source": self.source.value,
            "notes": self.notes,
            "raw": self.raw_input,
        }

    def to_flat_dict(self) -> dict:
        """Convert to flat dictionary for CSV export."""
        return {
            "tracking_number": self.tracking_number,
            "carrier": self.carrier.value,
            "confidence": self.confidence.value,
            "source": self.source.value,
            "notes": self.notes,
            "raw": self.raw_input,
        }


class SubmissionPackage(BaseModel):
    """One `{trackingNumber, notes}` pair handed to the receiving service."""

    tracking_number: str = Field(..., min_length=1, alias="trackingNumber")
    notes: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("notes", mode="before")
    @classmethod
    def blank_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Blank notes are sent as null."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None


class ReceiptSubmission(BaseModel):
    """Final deduplicated batch keyed to a verified recipient."""

    recipient_id: str = Field(..., alias="mailboxNumber")
    packages: list[SubmissionPackage] = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("recipient_id")
    @classmethod
    def normalize_recipient(cls, v: str) -> str:
        """Recipient ids are matched uppercase without surrounding spaces."""
        v = v.strip().upper()
        if not v:
            raise ValueError("recipient id must not be empty")
        return v

    @model_validator(mode="after")
    def validate_unique_packages(self) -> "ReceiptSubmission":
        """A tracking number may appear only once per submission."""
        seen = set()
        for package in self.packages:
            if package.tracking_number in seen:
                raise ValueError(
                    f"duplicate tracking number in submission: {package.tracking_number}"
                )
            seen.add(package.tracking_number)
        return self

    @property
    def tracking_numbers(self) -> list[str]:
        return [p.tracking_number for p in self.packages]

    def to_payload(self) -> dict:
        """Request body for the remote record-and-notify operation."""
        return self.model_dump(mode="json", by_alias=True)
