"""Structured logging configuration for the tracking extractor.

Provides JSON-formatted structured logging for log aggregation systems, or
colored console output during development.

Usage:
    from tracking_extractor.logging import get_logger, configure_logging

    # Configure at application startup
    configure_logging(log_level="INFO", log_format="json")

    # Or append to a receiving-desk log file
    configure_logging(log_file="receiving.log")

    # Get logger in modules
    logger = get_logger(__name__)

    # Log with structured context
    logger.info("batch_merged", added=3, duplicates=1)
"""

import logging
import sys
from typing import Callable, Optional, TextIO

import structlog
from structlog.types import Processor


def _create_service_context_processor(
    service_name: str, extra_context: Optional[dict] = None
) -> Callable:
    """Create a processor that adds service context to log entries."""
    extra = extra_context or {}

    def _add_service_context(
        logger: logging.Logger, method_name: str, event_dict: dict  # noqa: ARG001
    ) -> dict:
        event_dict["service"] = service_name
        event_dict.update(extra)
        return event_dict

    return _add_service_context


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    stream: Optional[TextIO] = None,
    log_file: Optional[str] = None,
    service_name: str = "tracking-extractor",
    extra_context: Optional[dict] = None,
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format - 'json' for structured, 'text' for console
        stream: Output stream (default: sys.stderr)
        log_file: Append logs to this file instead of the stream
        service_name: Service name included in all log entries
        extra_context: Static context dict added to all log entries

    Example:
        configure_logging(
            log_level="INFO",
            service_name="receiving-desk",
            extra_context={"station": "dock-2"}
        )
    """
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _create_service_context_processor(service_name, extra_context),
    ]

    if log_format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        # No ANSI colors in files
        processors.append(structlog.dev.ConsoleRenderer(colors=log_file is None))

    structlog.reset_defaults()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,  # Disable caching for test flexibility
    )

    root_logger = logging.getLogger()
    for old_handler in root_logger.handlers[:]:
        root_logger.removeHandler(old_handler)
        old_handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    level = getattr(logging, log_level.upper(), logging.INFO)
    handler.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)


class ExtractorLogger:
    """Domain-specific logger with predefined event methods.

    Provides typed logging methods for extraction and batch events.
    """

    def __init__(self, name: str = None):
        self._logger = get_logger(name)

    def extraction_started(self, input_length: int, **extra) -> None:
        """Log the start of an extraction call."""
        self._logger.debug(
            "extraction_started",
            input_length=input_length,
            **extra
        )

    def extraction_completed(
        self,
        candidate_count: int,
        review_count: int = 0,
        duration_ms: float = None,
        **extra
    ) -> None:
        """Log extraction results."""
        self._logger.debug(
            "extraction_completed",
            candidate_count=candidate_count,
            review_count=review_count,
            duration_ms=duration_ms,
            **extra
        )

    def candidate_matched(
        self,
        tracking_number: str,
        carrier: str,
        confidence: str,
        rule: str = None,
        **extra
    ) -> None:
        """Log a classified candidate."""
        self._logger.debug(
            "candidate_matched",
            tracking_number=tracking_number,
            carrier=carrier,
            confidence=confidence,
            rule=rule,
            **extra
        )

    def token_skipped(self, length: int, reason: str, **extra) -> None:
        """Log a token that was not scanned."""
        self._logger.debug(
            "token_skipped",
            length=length,
            reason=reason,
            **extra
        )

    def input_truncated(self, original_length: int, scanned_length: int, **extra) -> None:
        """Log oversized input that was capped."""
        self._logger.warning(
            "input_truncated",
            original_length=original_length,
            scanned_length=scanned_length,
            **extra
        )

    def input_rejected(self, input_type: str, **extra) -> None:
        """Log input that is not text."""
        self._logger.warning(
            "input_rejected",
            input_type=input_type,
            **extra
        )

    def batch_merged(
        self,
        source: str,
        detected: int,
        added: int,
        duplicates: int,
        **extra
    ) -> None:
        """Log a merge of extraction results into a batch."""
        self._logger.info(
            "batch_merged",
            source=source,
            detected=detected,
            added=added,
            duplicates=duplicates,
            **extra
        )

    def batch_submitted(self, recipient_id: str, package_count: int, **extra) -> None:
        """Log a successful submission."""
        self._logger.info(
            "batch_submitted",
            recipient_id=recipient_id,
            package_count=package_count,
            **extra
        )

    def submission_failed(
        self,
        recipient_id: str,
        error: str,
        error_type: str = "SubmissionError",
        **extra
    ) -> None:
        """Log a rejected submission."""
        self._logger.error(
            "submission_failed",
            recipient_id=recipient_id,
            error=error,
            error_type=error_type,
            **extra
        )

    def file_error(
        self,
        file_path: str,
        error: str,
        error_type: str = "InputFileError",
        **extra
    ) -> None:
        """Log an unreadable input file."""
        self._logger.error(
            "file_error",
            file_path=file_path,
            error=error,
            error_type=error_type,
            **extra
        )

    def batch_summary(
        self,
        total_inputs: int,
        collected: int,
        duplicates: int,
        needs_review: int = 0,
        **extra
    ) -> None:
        """Log batch processing summary."""
        self._logger.info(
            "batch_summary",
            total_inputs=total_inputs,
            collected=collected,
            duplicates=duplicates,
            needs_review=needs_review,
            **extra
        )

    def info(self, event: str, **kwargs) -> None:
        """Generic info log."""
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs) -> None:
        """Generic warning log."""
        self._logger.warning(event, **kwargs)

    def error(self, event: str, **kwargs) -> None:
        """Generic error log."""
        self._logger.error(event, **kwargs)

    def debug(self, event: str, **kwargs) -> None:
        """Generic debug log."""
        self._logger.debug(event, **kwargs)

