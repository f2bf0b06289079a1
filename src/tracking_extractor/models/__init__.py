"""Data models for extraction results and receiving batches."""

from .enums import Carrier, Confidence, CaptureSource
from .tracking import ParsedTrackingNumber
from .batch import BatchEntry, SubmissionPackage, ReceiptSubmission

__all__ = [
    "Carrier",
    "Confidence",
    "CaptureSource",
    "ParsedTrackingNumber",
    "BatchEntry",
    "SubmissionPackage",
    "ReceiptSubmission",
]
