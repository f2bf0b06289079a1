"""Text normalization for scanned, typed and pasted input."""

import re
from typing import Any, Iterable, Optional, Tuple


class TextNormalizer:
    """Handles input coercion and tracking-number normalization."""

    # Characters printed between groups on labels
    SEPARATOR_PATTERN = re.compile(r"[\s\-]")

    WHITESPACE = (" ", "\t", "\n", "\r")

    @staticmethod
    def coerce_input(value: Any) -> Optional[str]:
        """
        Coerce scanner/clipboard input to text.

        Example: b'1Z999AA10123456784' -> '1Z999AA10123456784'

        Returns None for values that are not text or bytes.
        """
        if isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        return None

    @classmethod
    def compact(cls, text: str) -> str:
        """
        Strip separators and uppercase.

        Example: '1z 999 aa1 01 2345 6784' -> '1Z999AA10123456784'
        """
        return cls.SEPARATOR_PATTERN.sub("", text).upper()

    @classmethod
    def truncate(cls, text: str, max_chars: int) -> Tuple[str, bool]:
        """
        Cap text length without splitting a token at the boundary.

        Returns:
            Tuple of (text, was_truncated).
        """
        if len(text) <= max_chars:
            return text, False

        head = text[:max_chars]
        if not text[max_chars].isspace():
            boundary = max(head.rfind(c) for c in cls.WHITESPACE)
            if boundary > 0:
                head = head[:boundary]
        return head, True

    @staticmethod
    def mask(text: str, spans: Iterable[Tuple[int, int]]) -> str:
        """
        Blank out consumed spans, preserving character offsets.

        Example: mask('AB CD', [(0, 2)]) -> '   CD'
        """
        chars = list(text)
        for start, end in spans:
            chars[start:end] = " " * (end - start)
        return "".join(chars)
