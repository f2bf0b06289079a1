"""Tracking-number extractor that orchestrates span scanning and rule matching."""

import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from .carriers.rules import RuleMatch, RuleRegistry, get_default_registry
from .config import ExtractorSettings, get_settings
from .exceptions import InputFileError
from .logging import ExtractorLogger
from .models.enums import Carrier, Confidence
from .models.tracking import ParsedTrackingNumber
from .normalizers.text import TextNormalizer


logger = ExtractorLogger(__name__)


# =============================================================================
# Scan Patterns
# =============================================================================

# Printed labels group characters with single spaces, tabs or hyphens.
# Each span must be bounded by non-alphanumerics on both sides.
SPAN_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("ups", re.compile(
        r"(?<![0-9A-Z])1Z(?:[ \t-]?[0-9A-Z]){16}(?![0-9A-Z])",
        re.IGNORECASE | re.ASCII,
    )),
    ("amazon", re.compile(
        r"(?<![0-9A-Z])TBA(?:[ \t-]?[0-9]){12}(?![0-9A-Z])",
        re.IGNORECASE | re.ASCII,
    )),
]

# A run of digit groups joined by single separators, e.g. "9865 7878 8855 2024-01-05"
DIGIT_RUN_PATTERN = re.compile(
    r"(?<![0-9A-Z])[0-9]+(?:[ \t-][0-9]+)*(?![0-9A-Z])",
    re.IGNORECASE | re.ASCII,
)

DIGIT_GROUP_PATTERN = re.compile(r"[0-9]+")

# Printed group layouts, longest first:
# 26-digit label barcodes, USPS 22, 20-digit forms, FedEx 12, DHL 10
GROUP_LAYOUTS: List[Tuple[int, ...]] = [
    (4, 4, 4, 4, 4, 4, 2),
    (4, 4, 4, 4, 4, 2),
    (4, 4, 4, 4, 4),
    (4, 4, 4),
    (4, 4, 2),
]

_MAX_LAYOUT_GROUPS = max(len(layout) for layout in GROUP_LAYOUTS)

TOKEN_PATTERN = re.compile(r"[0-9A-Za-z]+")

_DIGIT_PATTERN = re.compile(r"[0-9]")


# =============================================================================
# Candidate Types
# =============================================================================

@dataclass
class Candidate:
    """A classified match located in the input text."""
    start: int
    end: int
    tracking_number: str
    carrier: Carrier
    confidence: Confidence
    rule_name: Optional[str] = None

    def to_parsed(self, text: str) -> ParsedTrackingNumber:
        return ParsedTrackingNumber(
            tracking_number=self.tracking_number,
            carrier=self.carrier,
            confidence=self.confidence,
            raw=text[self.start:self.end],
        )


# =============================================================================
# Main Extractor Class
# =============================================================================

class TrackingNumberExtractor:
    """
    Extracts carrier tracking numbers from free-form text.

    The input may be a keyboard-wedge scan, a decoded camera barcode, or a
    pasted label or manifest. Every plausible tracking number is located,
    classified against the ordered carrier rules, and returned once, in order
    of first appearance.

    The extractor holds only configuration and compiled patterns, so one
    instance can be shared between threads.
    """

    def __init__(
        self,
        settings: Optional[ExtractorSettings] = None,
        registry: Optional[RuleRegistry] = None,
    ):
        """
        Initialize extractor.

        Args:
            settings: Optional ExtractorSettings instance for Dependency Injection.
            registry: Optional RuleRegistry for custom carrier rules.
        """
        self._settings = settings or get_settings()
        self._registry = registry if registry is not None else get_default_registry()

    @property
    def settings(self) -> ExtractorSettings:
        return self._settings

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    # =========================================================================
    # Main Extraction Methods
    # =========================================================================

    def extract(self, text: Any) -> List[ParsedTrackingNumber]:
        """
        Extract tracking numbers from text.

        Args:
            text: Raw input. Bytes are decoded as UTF-8; anything that is not
                text yields an empty result.

        Returns:
            Deduplicated ParsedTrackingNumber list ordered by position.
        """
        started = time.perf_counter()

        coerced = TextNormalizer.coerce_input(text)
        if coerced is None:
            if text is not None:
                logger.input_rejected(input_type=type(text).__name__)
            return []
        if not coerced.strip():
            return []

        scanned, truncated = TextNormalizer.truncate(coerced, self._settings.max_input_chars)
        if truncated:
            logger.input_truncated(
                original_length=len(coerced),
                scanned_length=len(scanned),
            )

        logger.extraction_started(input_length=len(scanned))

        span_candidates, consumed = self._scan_spans(scanned)
        masked = TextNormalizer.mask(scanned, consumed)
        token_candidates = self._scan_tokens(masked)

        # Stable sort keeps span matches ahead of tokens at the same offset
        candidates = sorted(span_candidates + token_candidates, key=lambda c: c.start)

        results: List[ParsedTrackingNumber] = []
        seen = set()
        for candidate in candidates:
            if candidate.tracking_number in seen:
                continue
            seen.add(candidate.tracking_number)
            logger.candidate_matched(
                tracking_number=candidate.tracking_number,
                carrier=candidate.carrier.value,
                confidence=candidate.confidence.value,
                rule=candidate.rule_name,
            )
            results.append(candidate.to_parsed(scanned))

        logger.extraction_completed(
            candidate_count=len(results),
            review_count=sum(1 for r in results if r.needs_review),
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        return results

    def extract_file(
        self, filepath: Union[str, Path], encoding: str = "utf-8"
    ) -> List[ParsedTrackingNumber]:
        """
        Extract tracking numbers from a text file (manifest, label dump).

        Raises:
            InputFileError: If the file cannot be read or decoded.
        """
        filepath = Path(filepath)
        try:
            text = filepath.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise InputFileError(str(filepath), str(e))
        return self.extract(text)

    # =========================================================================
    # Scan Passes
    # =========================================================================

    def _scan_spans(self, text: str) -> Tuple[List[Candidate], List[Tuple[int, int]]]:
        """Classify separator-grouped spans; only matched spans are consumed."""
        candidates: List[Candidate] = []
        consumed: List[Tuple[int, int]] = []

        for _, pattern in SPAN_PATTERNS:
            for m in pattern.finditer(text):
                start, end = m.span()
                if _overlaps(start, end, consumed):
                    continue

                match = self._registry.match(TextNormalizer.compact(m.group()))
                if match is None:
                    continue

                candidates.append(_span_candidate(match, start, end))
                consumed.append((start, end))

        for run in DIGIT_RUN_PATTERN.finditer(text):
            groups = [g.span() for g in DIGIT_GROUP_PATTERN.finditer(text, run.start(), run.end())]
            index = 0
            while index < len(groups):
                found = self._match_groups(text, groups[index:index + _MAX_LAYOUT_GROUPS])
                if found is None or _overlaps(found[0].start, found[0].end, consumed):
                    index += 1
                    continue
                candidate, group_count = found
                candidates.append(candidate)
                consumed.append((candidate.start, candidate.end))
                index += group_count

        return candidates, consumed

    def _match_groups(
        self, text: str, groups: List[Tuple[int, int]]
    ) -> Optional[Tuple[Candidate, int]]:
        """
        Match the leading digit groups of a run against the printed layouts.

        The longest layout matching at HIGH wins, else the longest that
        matches at all.

        Returns:
            (Candidate, number of groups used), or None.
        """
        lengths = tuple(end - start for start, end in groups)
        fallback = None

        for layout in GROUP_LAYOUTS:
            if lengths[:len(layout)] != layout:
                continue
            start, end = groups[0][0], groups[len(layout) - 1][1]
            match = self._registry.match(TextNormalizer.compact(text[start:end]))
            if match is None:
                continue
            if match.confidence is Confidence.HIGH:
                return _span_candidate(match, start, end), len(layout)
            if fallback is None:
                fallback = (_span_candidate(match, start, end), len(layout))

        return fallback

    def _scan_tokens(self, text: str) -> List[Candidate]:
        """Classify maximal alphanumeric runs."""
        candidates: List[Candidate] = []

        for m in TOKEN_PATTERN.finditer(text):
            token = m.group()
            if len(token) > self._settings.max_token_length:
                logger.token_skipped(length=len(token), reason="max_token_length")
                continue
            candidates.extend(self._resolve_token(token.upper(), m.start()))

        return candidates

    def _resolve_token(self, token: str, offset: int) -> List[Candidate]:
        """
        Resolve one uppercase token to candidates.

        Order: whole-token HIGH match, then fixed-length windows that are all
        HIGH, then the whole-token MEDIUM match, then windows that all match
        at any confidence, then an unclassified token.
        """
        whole = self._registry.match(token)
        if whole is not None and whole.confidence is Confidence.HIGH:
            return [self._from_match(whole, offset)]

        windows = self._split_windows(token)
        if windows:
            return [self._from_match(match, offset) for match in windows]

        if whole is not None:
            return [self._from_match(whole, offset)]

        # A concatenation with one mis-scanned number still yields every window
        windows = self._split_windows(token, require_high=False)
        if windows:
            return [self._from_match(match, offset) for match in windows]

        if (
            self._settings.unknown_min_length <= len(token) <= self._settings.unknown_max_length
            and _DIGIT_PATTERN.search(token)
        ):
            return [Candidate(
                start=offset,
                end=offset + len(token),
                tracking_number=token,
                carrier=Carrier.UNKNOWN,
                confidence=Confidence.MEDIUM,
            )]

        return []

    def _split_windows(self, token: str, require_high: bool = True) -> List[RuleMatch]:
        """
        Split concatenated scans into fixed-length windows.

        Returns window matches (offsets relative to the token) when every
        window matches a rule, at HIGH confidence if ``require_high``, else
        an empty list.
        """
        for length in self._registry.fixed_lengths():
            if len(token) % length or len(token) // length < 2:
                continue

            matches: List[RuleMatch] = []
            for window_start in range(0, len(token), length):
                match = self._registry.match(token[window_start:window_start + length])
                if match is None or (require_high and match.confidence is not Confidence.HIGH):
                    break
                matches.append(RuleMatch(
                    rule_name=match.rule_name,
                    carrier=match.carrier,
                    tracking_number=match.tracking_number,
                    confidence=match.confidence,
                    start=window_start + match.start,
                    end=window_start + match.end,
                ))
            else:
                return matches

        return []

    @staticmethod
    def _from_match(match: RuleMatch, offset: int) -> Candidate:
        return Candidate(
            start=offset + match.start,
            end=offset + match.end,
            tracking_number=match.tracking_number,
            carrier=match.carrier,
            confidence=match.confidence,
            rule_name=match.rule_name,
        )


def _overlaps(start: int, end: int, spans: List[Tuple[int, int]]) -> bool:
    return any(start < s_end and s_start < end for s_start, s_end in spans)


def _span_candidate(match: RuleMatch, start: int, end: int) -> Candidate:
    return Candidate(
        start=start,
        end=end,
        tracking_number=match.tracking_number,
        carrier=match.carrier,
        confidence=match.confidence,
        rule_name=match.rule_name,
    )


def extract_tracking_numbers(
    text: Any, settings: Optional[ExtractorSettings] = None
) -> List[ParsedTrackingNumber]:
    """
    Extract tracking numbers from text with the default carrier rules.

    Example:
        >>> [p.tracking_number for p in extract_tracking_numbers("Ref 1Z999AA10123456784")]
        ['1Z999AA10123456784']
    """
    return TrackingNumberExtractor(settings=settings).extract(text)
