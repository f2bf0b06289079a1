"""
Carrier Tracking-Number Extractor

A Python library for locating, classifying and batching carrier tracking
numbers found in barcode scans, shipping labels and pasted manifests.
"""

__version__ = "1.0.0"

from .extractor import TrackingNumberExtractor, extract_tracking_numbers
from .summarizer import summarize_carrier_mix, count_carriers
from .batch import (
    ReceivingBatch,
    MergeResult,
    ReceivingService,
    InMemoryReceivingService,
    ReceiptResult,
)
from .carriers import CarrierRule, RuleMatch, RuleRegistry, get_default_registry
from .models import (
    Carrier,
    Confidence,
    CaptureSource,
    ParsedTrackingNumber,
    BatchEntry,
    SubmissionPackage,
    ReceiptSubmission,
)
from .config import ExtractorSettings, ConfigurationError
from .exceptions import (
    ReceivingException,
    InputError,
    InputFileError,
    BatchError,
    EntryNotFoundError,
    EmptyBatchError,
    MissingRecipientError,
    SubmissionError,
    RecipientNotFoundError,
    DuplicatePackagesError,
    OutputError,
    FileWriteError,
    UnsupportedFormatError,
)
from .logging import (
    configure_logging,
    get_logger,
    ExtractorLogger,
)

__all__ = [
    "TrackingNumberExtractor",
    "extract_tracking_numbers",
    "summarize_carrier_mix",
    "count_carriers",
    # Batch
    "ReceivingBatch",
    "MergeResult",
    "ReceivingService",
    "InMemoryReceivingService",
    "ReceiptResult",
    # Rules
    "CarrierRule",
    "RuleMatch",
    "RuleRegistry",
    "get_default_registry",
    # Models
    "Carrier",
    "Confidence",
    "CaptureSource",
    "ParsedTrackingNumber",
    "BatchEntry",
    "SubmissionPackage",
    "ReceiptSubmission",
    # Config
    "ExtractorSettings",
    "ConfigurationError",
    # Exceptions
    "ReceivingException",
    "InputError",
    "InputFileError",
    "BatchError",
    "EntryNotFoundError",
    "EmptyBatchError",
    "MissingRecipientError",
    "SubmissionError",
    "RecipientNotFoundError",
    "DuplicatePackagesError",
    "OutputError",
    "FileWriteError",
    "UnsupportedFormatError",
    # Logging
    "configure_logging",
    "get_logger",
    "ExtractorLogger",
]
