from .inference.sniff_core import (
    Comment,
    Dialect,
    Escape,
    Header,
    Metadata,
    Quote,
    Terminator,
    Type,
)
from .inference.errors import (
    EmptyInputError,
    NoDelimiterFoundError,
    RecordWidthError,
    SampleDecodeError,
    SampleReadError,
    SniffError,
)
from .inference.sniffer import Sniffer, sniff_path, sniff_reader
from .reader.dialect_reader import DelimitedRecordReader
from .report import render_report

__version__ = "0.1.0"
