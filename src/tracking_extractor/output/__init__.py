"""Output formatters for JSON and CSV."""

from ..exceptions import UnsupportedFormatError
from .json_writer import JSONWriter
from .csv_writer import CSVWriter

WRITERS = {
    "json": JSONWriter,
    "csv": CSVWriter,
}


def get_writer(format_name: str):
    """
    Look up the writer class for an output format.

    Raises:
        UnsupportedFormatError: If no writer handles the format.
    """
    writer = WRITERS.get(format_name.lower())
    if writer is None:
        raise UnsupportedFormatError(format_name, sorted(WRITERS))
    return writer


__all__ = ["JSONWriter", "CSVWriter", "WRITERS", "get_writer"]
