"""Custom exceptions for the tracking extractor and receiving batch.

Extraction itself never raises: malformed input yields an empty result.
These exceptions cover the caller-facing surfaces around it (input files,
batch mutation, submission, output) and carry structured details for logging.
"""

from typing import Optional, Any


class ReceivingException(Exception):
    """Base exception for all package errors.

    Attributes:
        message: Human-readable error description
        details: Additional context for debugging
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# =============================================================================
# Input Errors
# =============================================================================

class InputError(ReceivingException):
    """Raised when scanner or label input cannot be read."""

    def __init__(self, message: str, filepath: Optional[str] = None,
                 details: Optional[dict[str, Any]] = None):
        details = details or {}
        if filepath:
            details["filepath"] = filepath
        super().__init__(message, details)
        self.filepath = filepath


class InputFileError(InputError):
    """Raised when an input text file cannot be opened or decoded."""

    def __init__(self, filepath: str, original_error: str):
        super().__init__(
            f"Could not read input file: {filepath}",
            filepath=filepath,
            details={"error": original_error}
        )
        self.original_error = original_error


# =============================================================================
# Batch Errors
# =============================================================================

class BatchError(ReceivingException):
    """Base class for receiving-batch errors."""
    pass


class EntryNotFoundError(BatchError):
    """Raised when a tracking number is not part of the batch."""

    def __init__(self, tracking_number: str):
        super().__init__(
            f"Tracking number not in batch: {tracking_number}",
            {"tracking_number": tracking_number}
        )
        self.tracking_number = tracking_number


class EmptyBatchError(BatchError):
    """Raised when submitting a batch with no packages."""

    def __init__(self):
        super().__init__("Add at least one package to continue.")


class MissingRecipientError(BatchError):
    """Raised when submitting without a verified recipient."""

    def __init__(self):
        super().__init__("Verify a mailbox before submitting packages.")


# =============================================================================
# Submission Errors
# =============================================================================

class SubmissionError(ReceivingException):
    """Raised when the receiving service rejects a submission."""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[dict[str, Any]] = None):
        details = details or {}
        if code:
            details["code"] = code
        super().__init__(message, details)
        self.code = code


class RecipientNotFoundError(SubmissionError):
    """Raised when the service does not know the recipient id."""

    def __init__(self, recipient_id: str):
        super().__init__(
            "Mailbox not found. Confirm the number and try again.",
            code="MAILBOX_NOT_FOUND",
            details={"recipient_id": recipient_id}
        )
        self.recipient_id = recipient_id


class DuplicatePackagesError(SubmissionError):
    """Raised when every tracking number was already recorded."""

    def __init__(self, tracking_numbers: list[str]):
        super().__init__(
            "Each tracking number in this batch has already been recorded.",
            code="DUPLICATE_PACKAGES",
            details={"tracking_numbers": tracking_numbers}
        )
        self.tracking_numbers = tracking_numbers


# =============================================================================
# Output Errors
# =============================================================================

class OutputError(ReceivingException):
    """Base class for output-related errors."""
    pass


class FileWriteError(OutputError):
    """Raised when file writing fails."""

    def __init__(self, filepath: str, original_error: str):
        super().__init__(
            f"Failed to write file: {filepath}",
            {"filepath": filepath, "error": original_error}
        )
        self.filepath = filepath


class UnsupportedFormatError(OutputError):
    """Raised when output format is not supported."""

    def __init__(self, format_name: str, supported_formats: list[str]):
        super().__init__(
            f"Unsupported output format: '{format_name}'",
            {"format": format_name, "supported": supported_formats}
        )
        self.format_name = format_name
        self.supported_formats = supported_formats
