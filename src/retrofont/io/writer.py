"""Font writer for saving TDF bundles.

This module provides the FontWriter class for writing font records as a
TheDraw bundle.
"""

from pathlib import Path

import structlog

from retrofont.domain import FontRecord
from retrofont.exceptions import FontSaveError
from retrofont.io.bundle import serialize_bundle

logger = structlog.get_logger(__name__)


class FontWriter:
    """Writes font records to a TDF bundle file.

    Example:
        writer = FontWriter(Path("output.tdf"))
        writer.add_record(record)
        writer.save()
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the font writer.

        Args:
            output_path: Path where the bundle will be saved
        """
        self._output_path = output_path
        self._records: list[FontRecord] = []

    def add_record(self, record: FontRecord) -> None:
        """Queue a font record; records are written in the order added."""
        self._records.append(record)

    @property
    def record_count(self) -> int:
        """Number of queued records."""
        return len(self._records)

    def save(self) -> int:
        """Serialize the queued records and write the bundle.

        Serialization happens before the file is opened, so an encoding
        error never leaves a partial file behind.

        Returns:
            Number of bytes written

        Raises:
            SerializationError: If a record cannot be encoded
            FontSaveError: If the file cannot be written
        """
        data = serialize_bundle(self._records)
        try:
            self._output_path.write_bytes(data)
        except OSError as e:
            raise FontSaveError(str(self._output_path), str(e)) from e

        logger.info(
            "Bundle saved",
            output=str(self._output_path),
            records=len(self._records),
            size=len(data),
        )
        return len(data)

    @staticmethod
    def get_converted_path(input_path: Path) -> Path:
        """Generate the default output path for a converted font.

        Converts: doom.flf -> doom.tdf
                  fonts/big.flf.gz -> fonts/big.flf.tdf

        Args:
            input_path: Source font file path

        Returns:
            Path with the .tdf suffix
        """
        return input_path.with_suffix(".tdf")
