"""JSON output writer."""

import json
from pathlib import Path
from typing import Sequence, Union

from ..exceptions import FileWriteError
from ..models.batch import BatchEntry
from ..models.tracking import ParsedTrackingNumber


Record = Union[ParsedTrackingNumber, BatchEntry]


class JSONWriter:
    """Writes extraction results or batch entries to JSON format."""

    @classmethod
    def to_dict(cls, record: Record, exclude_none: bool = True) -> dict:
        """
        Convert a record to a camelCase dictionary.

        Args:
            record: ParsedTrackingNumber or BatchEntry.
            exclude_none: Whether to exclude None values.
        """
        data = record.to_dict()
        if exclude_none:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    @classmethod
    def _dump(cls, data, filepath: Union[str, Path], pretty: bool) -> None:
        filepath = Path(filepath)
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)
        except OSError as e:
            raise FileWriteError(str(filepath), str(e))

    @classmethod
    def write(
        cls,
        record: Record,
        filepath: Union[str, Path],
        pretty: bool = True,
        exclude_none: bool = True,
    ) -> None:
        """
        Write a single record to a JSON file.

        Raises:
            FileWriteError: If the file cannot be written.
        """
        cls._dump(cls.to_dict(record, exclude_none), filepath, pretty)

    @classmethod
    def write_batch(
        cls,
        records: Sequence[Record],
        filepath: Union[str, Path],
        pretty: bool = True,
        exclude_none: bool = True,
    ) -> None:
        """
        Write records to a JSON array file.

        Raises:
            FileWriteError: If the file cannot be written.
        """
        cls._dump([cls.to_dict(r, exclude_none) for r in records], filepath, pretty)

    @classmethod
    def to_json_string(
        cls,
        records: Union[Record, Sequence[Record]],
        pretty: bool = True,
        exclude_none: bool = True,
    ) -> str:
        """
        Convert one record, or a list of records, to a JSON string.

        Returns:
            JSON object for a single record, JSON array for a sequence.
        """
        if isinstance(records, (ParsedTrackingNumber, BatchEntry)):
            data = cls.to_dict(records, exclude_none)
        else:
            data = [cls.to_dict(r, exclude_none) for r in records]
        return json.dumps(data, ensure_ascii=False, indent=2 if pretty else None)
