"""CSV output writer."""

import csv
import io
from pathlib import Path
from typing import Sequence, Union

from ..exceptions import FileWriteError
from ..models.batch import BatchEntry
from ..models.tracking import ParsedTrackingNumber


Record = Union[ParsedTrackingNumber, BatchEntry]


class CSVWriter:
    """Writes extraction results or batch entries to CSV format."""

    # Standard column order for CSV output
    COLUMNS = [
        "tracking_number",
        "carrier",
        "confidence",
        "source",
        "notes",
        "raw",
    ]

    @classmethod
    def _write_rows(cls, f, records: Sequence[Record], include_header: bool) -> None:
        writer = csv.DictWriter(f, fieldnames=cls.COLUMNS, extrasaction="ignore")
        if include_header:
            writer.writeheader()
        writer.writerows(r.to_flat_dict() for r in records)

    @classmethod
    def write_batch(
        cls,
        records: Sequence[Record],
        filepath: Union[str, Path],
        include_header: bool = True,
    ) -> None:
        """
        Write records to a CSV file.

        Args:
            records: ParsedTrackingNumbers or BatchEntries.
            filepath: Output file path.
            include_header: Whether to include column header row.

        Raises:
            FileWriteError: If the file cannot be written.
        """
        filepath = Path(filepath)
        try:
            with open(filepath, "w", newline="", encoding="utf-8-sig") as f:
                cls._write_rows(f, records, include_header)
        except OSError as e:
            raise FileWriteError(str(filepath), str(e))

    @classmethod
    def append(cls, records: Sequence[Record], filepath: Union[str, Path]) -> None:
        """
        Append records to a CSV file, writing the header if it is new.

        Raises:
            FileWriteError: If the file cannot be written.
        """
        filepath = Path(filepath)
        file_exists = filepath.exists()

        # BOM only at the start of a new file
        encoding = "utf-8" if file_exists else "utf-8-sig"
        try:
            with open(filepath, "a", newline="", encoding=encoding) as f:
                cls._write_rows(f, records, include_header=not file_exists)
        except OSError as e:
            raise FileWriteError(str(filepath), str(e))

    @classmethod
    def to_csv_string(
        cls,
        records: Sequence[Record],
        include_header: bool = True,
    ) -> str:
        """
        Convert records to CSV string.

        Returns:
            CSV formatted string.
        """
        output = io.StringIO()
        cls._write_rows(output, records, include_header)
        return output.getvalue()
