"""Validation utilities: check digits and confidence review."""

from .checksums import (
    gs1_mod10,
    gs1_mod10_check_digit,
    ups_1z,
    fedex_mod11,
    dhl_mod7,
    upu_s10,
)
from .confidence import ConfidenceValidator

__all__ = [
    "gs1_mod10",
    "gs1_mod10_check_digit",
    "ups_1z",
    "fedex_mod11",
    "dhl_mod7",
    "upu_s10",
    "ConfidenceValidator",
]
