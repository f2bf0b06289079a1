"""Receiving batch that accumulates extraction results across scans.

The extractor deduplicates within a single call; the batch deduplicates across
calls, keeps operator notes, and hands the final list to the receiving service.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .exceptions import (
    DuplicatePackagesError,
    EmptyBatchError,
    EntryNotFoundError,
    MissingRecipientError,
    RecipientNotFoundError,
    SubmissionError,
)
from .logging import ExtractorLogger
from .models.batch import BatchEntry, ReceiptSubmission, SubmissionPackage
from .models.enums import CaptureSource, Carrier
from .models.tracking import ParsedTrackingNumber
from .normalizers.text import TextNormalizer
from .summarizer import summarize_carrier_mix
from .validators.confidence import ConfidenceValidator


logger = ExtractorLogger(__name__)


# =============================================================================
# Receiving Service Boundary
# =============================================================================

@dataclass
class ReceiptResult:
    """Acknowledgement returned by the receiving service."""
    message: str
    tracking_numbers: List[str] = field(default_factory=list)


class ReceivingService(ABC):
    """
    Remote "record and notify" operation.

    Implementations raise SubmissionError with a ``code`` when the service
    rejects a submission. Known codes are MAILBOX_NOT_FOUND and
    DUPLICATE_PACKAGES.
    """

    @abstractmethod
    def record_and_notify(self, submission: ReceiptSubmission) -> ReceiptResult:
        """Record the packages and notify the recipient."""
        ...


class InMemoryReceivingService(ReceivingService):
    """Receiving service that keeps recorded packages in memory."""

    def __init__(self, recipients: Iterable[str] = ()):
        self._recipients = {r.strip().upper() for r in recipients}
        self._recorded: Dict[str, List[str]] = {}

    def record_and_notify(self, submission: ReceiptSubmission) -> ReceiptResult:
        if submission.recipient_id not in self._recipients:
            raise SubmissionError("Mailbox not found", code="MAILBOX_NOT_FOUND")

        recorded = self._recorded.setdefault(submission.recipient_id, [])
        new_numbers = [tn for tn in submission.tracking_numbers if tn not in recorded]
        if not new_numbers:
            raise SubmissionError("Packages already recorded", code="DUPLICATE_PACKAGES")

        recorded.extend(new_numbers)
        return ReceiptResult(
            message=f"Recorded {len(new_numbers)} package(s) for {submission.recipient_id}.",
            tracking_numbers=new_numbers,
        )

    def recorded(self, recipient_id: str) -> List[str]:
        return list(self._recorded.get(recipient_id.strip().upper(), []))


# =============================================================================
# Merge Result
# =============================================================================

@dataclass
class MergeResult:
    """Outcome of merging one extraction call into the batch."""
    detected: int
    added: List[BatchEntry] = field(default_factory=list)
    duplicates: int = 0

    @property
    def added_count(self) -> int:
        return len(self.added)

    @property
    def carrier_counts(self) -> List[Tuple[Carrier, int]]:
        """Per-carrier counts of added entries, in first-seen order."""
        counts: Dict[Carrier, int] = {}
        for entry in self.added:
            counts[entry.carrier] = counts.get(entry.carrier, 0) + 1
        return list(counts.items())

    @property
    def review_count(self) -> int:
        return sum(1 for entry in self.added if entry.needs_review)

    def messages(self) -> List[str]:
        """Operator-facing messages describing the merge."""
        if self.detected == 0:
            return ["No valid tracking numbers detected."]
        if self.added_count == 0:
            return ["All detected tracking numbers were already added to this batch."]

        messages = []
        if self.duplicates:
            messages.append(f"Skipped {self.duplicates} duplicate tracking number(s).")

        mix = ", ".join(f"{carrier.label} × {count}" for carrier, count in self.carrier_counts)
        messages.append(f"Added {self.added_count} tracking number(s) ({mix}).")

        if self.review_count:
            messages.append(f"{self.review_count} tracking number(s) need format review.")
        return messages


# =============================================================================
# Receiving Batch
# =============================================================================

class ReceivingBatch:
    """
    Ordered, duplicate-free collection of packages for one recipient.

    Mutations are serialized by an internal lock so scans arriving from
    several capture sources can merge concurrently.
    """

    EMPTY_LABEL = "Scan packages to add them to this batch."

    def __init__(self, recipient_id: Optional[str] = None):
        self.recipient_id = recipient_id
        self._entries: Dict[str, BatchEntry] = {}
        self._lock = threading.Lock()
        self._validator = ConfidenceValidator()

    # =========================================================================
    # Mutation
    # =========================================================================

    def merge(
        self,
        parsed: Iterable[ParsedTrackingNumber],
        source: Union[CaptureSource, str] = CaptureSource.KEYBOARD,
    ) -> MergeResult:
        """
        Add extraction results whose tracking number is not yet in the batch.

        Args:
            parsed: Results of one extraction call.
            source: How the input was captured.

        Returns:
            MergeResult with added entries and the duplicate count.
        """
        if isinstance(source, str):
            source = CaptureSource.from_text(source) or CaptureSource.KEYBOARD

        parsed = list(parsed)
        result = MergeResult(detected=len(parsed))

        with self._lock:
            for item in parsed:
                if item.tracking_number in self._entries:
                    result.duplicates += 1
                    continue
                entry = BatchEntry.from_parsed(item, source)
                self._entries[entry.tracking_number] = entry
                result.added.append(entry)

        for entry in result.added:
            warning = self._validator.get_warning_message(entry)
            if warning:
                logger.warning("review_required", tracking_number=entry.tracking_number,
                               message=warning)

        logger.batch_merged(
            source=source.value,
            detected=result.detected,
            added=result.added_count,
            duplicates=result.duplicates,
        )
        return result

    def update_notes(self, tracking_number: str, notes: str) -> BatchEntry:
        """
        Replace operator notes for one entry.

        Raises:
            EntryNotFoundError: If the tracking number is not in the batch.
        """
        key = TextNormalizer.compact(tracking_number)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise EntryNotFoundError(tracking_number)
            updated = entry.with_notes(notes)
            self._entries[key] = updated
        return updated

    def remove(self, tracking_number: str) -> BatchEntry:
        """
        Remove one entry.

        Raises:
            EntryNotFoundError: If the tracking number is not in the batch.
        """
        key = TextNormalizer.compact(tracking_number)
        with self._lock:
            entry = self._entries.pop(key, None)
        if entry is None:
            raise EntryNotFoundError(tracking_number)
        return entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def entries(self) -> List[BatchEntry]:
        """Snapshot of entries in insertion order."""
        with self._lock:
            return list(self._entries.values())

    def get(self, tracking_number: str) -> Optional[BatchEntry]:
        with self._lock:
            return self._entries.get(TextNormalizer.compact(tracking_number))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tracking_number: object) -> bool:
        if not isinstance(tracking_number, str):
            return False
        return TextNormalizer.compact(tracking_number) in self._entries

    def __iter__(self) -> Iterator[BatchEntry]:
        return iter(self.entries)

    def summarize(self) -> str:
        """Carrier mix of the whole batch, e.g. "UPS × 2, USPS × 1"."""
        return summarize_carrier_mix(self.entries)

    def count_label(self) -> str:
        count = len(self)
        if count == 0:
            return self.EMPTY_LABEL
        return f"{count} package{'s' if count != 1 else ''} ready to record"

    def review_notice(self) -> Optional[str]:
        """Notice for entries that failed strict validation, if any."""
        return ConfidenceValidator.review_notice(
            len(self._validator.filter_needs_review(self.entries))
        )

    # =========================================================================
    # Submission
    # =========================================================================

    def to_submission(self, recipient_id: Optional[str] = None) -> ReceiptSubmission:
        """
        Build the submission payload.

        Raises:
            MissingRecipientError: If no recipient id is set or given.
            EmptyBatchError: If the batch has no entries.
        """
        recipient = recipient_id or self.recipient_id
        if not recipient or not recipient.strip():
            raise MissingRecipientError()

        entries = self.entries
        if not entries:
            raise EmptyBatchError()

        return ReceiptSubmission(
            recipient_id=recipient,
            packages=[
                SubmissionPackage(tracking_number=e.tracking_number, notes=e.notes)
                for e in entries
            ],
        )

    def submit(
        self, service: ReceivingService, recipient_id: Optional[str] = None
    ) -> ReceiptResult:
        """
        Submit the batch and clear it on success.

        The batch is left intact when the service rejects the submission.

        Raises:
            MissingRecipientError, EmptyBatchError: Before calling the service.
            RecipientNotFoundError: Service reported MAILBOX_NOT_FOUND.
            DuplicatePackagesError: Service reported DUPLICATE_PACKAGES.
            SubmissionError: Any other service rejection.
        """
        submission = self.to_submission(recipient_id)

        try:
            result = service.record_and_notify(submission)
        except SubmissionError as e:
            error = _translate_error(e, submission)
            logger.submission_failed(
                recipient_id=submission.recipient_id,
                error=error.message,
                error_type=type(error).__name__,
            )
            if error is e:
                raise
            raise error from e

        with self._lock:
            for tracking_number in submission.tracking_numbers:
                self._entries.pop(tracking_number, None)

        logger.batch_submitted(
            recipient_id=submission.recipient_id,
            package_count=len(submission.packages),
        )
        return result


def _translate_error(error: SubmissionError, submission: ReceiptSubmission) -> SubmissionError:
    """Map a service error code to its specific exception."""
    if isinstance(error, (RecipientNotFoundError, DuplicatePackagesError)):
        return error
    if error.code == "MAILBOX_NOT_FOUND":
        return RecipientNotFoundError(submission.recipient_id)
    if error.code == "DUPLICATE_PACKAGES":
        return DuplicatePackagesError(submission.tracking_numbers)
    return error
