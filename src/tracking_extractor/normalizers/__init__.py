"""Text normalization utilities for scanner and label input."""

from .text import TextNormalizer

__all__ = ["TextNormalizer"]
