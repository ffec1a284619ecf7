import csv
import io
from itertools import islice
from pathlib import Path
import logging

from ..inference.errors import RecordWidthError, SampleReadError
from ..inference.utils import CompressionHandler

logger = logging.getLogger(__name__)


class DelimitedRecordReader:
    """Iterates the records of a delimited file according to a known dialect.

    Comment lines are dropped first, then exactly ``num_preamble_rows`` lines
    are skipped. When the dialect has a header row the first record is kept in
    ``header`` instead of being yielded. Blank lines produce no record.
    """

    def __init__(self, stream, dialect, owns_stream=False):
        self.dialect = dialect
        self.header = None
        self.records_read = 0
        self._stream = stream
        self._owns_stream = owns_stream
        self._wrapper = None
        self._header_read = not dialect.header.has_header_row
        self._expected_width = None

        if isinstance(stream, io.TextIOBase):
            self._text = stream
        else:
            self._wrapper = io.TextIOWrapper(stream, encoding="utf-8-sig", newline="")
            self._text = self._wrapper

        self._records = self._read_records()

    def _lines(self):
        comment = self.dialect.comment.char
        for i, line in enumerate(self._text):
            if i == 0:
                line = line.lstrip("\ufeff")
            if comment is not None and line.startswith(comment):
                continue
            yield line

    def _read_records(self):
        lines = islice(self._lines(), self.dialect.header.num_preamble_rows, None)
        reader = csv.reader(lines, **self.dialect.to_csv_kwargs())

        for record in reader:
            if not record:
                continue

            if self._expected_width is None:
                self._expected_width = len(record)
            elif not self.dialect.flexible and len(record) != self._expected_width:
                raise RecordWidthError(
                    self.records_read + 1, self._expected_width, len(record)
                )

            self.records_read += 1
            yield record

    def read_header(self):
        """Consume and return the header row (None when the dialect has none)."""
        if not self._header_read:
            self._header_read = True
            self.header = next(self._records, None)
        return self.header

    def __iter__(self):
        return self

    def __next__(self):
        self.read_header()
        return next(self._records)

    def close(self):
        if self._wrapper is not None and not self._owns_stream:
            # leave the caller's stream open
            self._wrapper.detach()
            self._wrapper = None
        elif self._owns_stream:
            (self._wrapper or self._stream).close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def open_path(filepath, dialect) -> DelimitedRecordReader:
    filepath = Path(filepath)
    try:
        stream = CompressionHandler.open_binary(filepath)
    except OSError as e:
        raise SampleReadError(f"Cannot open {filepath}: {e}") from e

    logger.debug(f"Opened {filepath} for reading with delimiter {dialect.delimiter!r}")
    return DelimitedRecordReader(stream, dialect, owns_stream=True)


def open_reader(stream, dialect) -> DelimitedRecordReader:
    return DelimitedRecordReader(stream, dialect)
