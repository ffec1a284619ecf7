from contextlib import contextmanager
from pathlib import Path
import logging

from .sniff_core import Metadata, Quote, SniffStage
from .base_detector import DialectDraft
from .errors import SampleReadError
from .utils import CompressionHandler
from .sampler import Sampler, DEFAULT_MAX_LINES, DEFAULT_MAX_BYTES
from .delimiter_detector import DelimiterDetector, DEFAULT_COVERAGE_THRESHOLD
from .quote_detector import QuoteEscapeDetector, CommentDetector
from .shape_analyzer import ShapeAnalyzer
from .header_detector import HeaderDetector
from .type_inferencer import TypeInferencer

logger = logging.getLogger(__name__)


@contextmanager
def rewound(stream):
    """Leave ``stream`` at the start of input however the block exits."""
    try:
        yield stream
    finally:
        try:
            stream.seek(0)
        except OSError as e:
            raise SampleReadError(f"Failed to rewind input: {e}") from e


class Sniffer:

    def __init__(
        self,
        max_lines=DEFAULT_MAX_LINES,
        max_bytes=DEFAULT_MAX_BYTES,
        delimiters=None,
        delimiter=None,
        quote=None,
        coverage_threshold=DEFAULT_COVERAGE_THRESHOLD,
    ):
        if delimiter is not None and len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character: {delimiter!r}")
        if isinstance(quote, str):
            quote = Quote.some(quote)
        if quote is not None and delimiter is not None and quote.char == delimiter:
            raise ValueError(f"Delimiter and quote cannot both be {delimiter!r}")

        self.delimiter = delimiter
        self.quote = quote
        self.sampler = Sampler(max_lines=max_lines, max_bytes=max_bytes)
        self.delimiter_detector = DelimiterDetector(delimiters, coverage_threshold)
        self.quote_detector = QuoteEscapeDetector()
        self.comment_detector = CommentDetector()
        self.shape_analyzer = ShapeAnalyzer()
        self.header_detector = HeaderDetector()
        self.type_inferencer = TypeInferencer()
        self.stage = SniffStage.START

        logger.debug(
            f"Initialized sniffer (max_lines={max_lines}, max_bytes={max_bytes}, "
            f"delimiters={self.delimiter_detector.delimiters!r})"
        )

    def _advance(self, stage):
        self.stage = stage
        logger.debug(f"Sniffer stage: {stage.value}")

    def sniff_path(self, filepath) -> Metadata:
        filepath = Path(filepath)

        if not filepath.exists():
            raise SampleReadError(f"File not found: {filepath}")

        if not filepath.is_file():
            raise SampleReadError(f"Path is not a file: {filepath}")

        try:
            stream = CompressionHandler.open_binary(filepath)
        except OSError as e:
            raise SampleReadError(f"Cannot open {filepath}: {e}") from e

        with stream:
            metadata = self.sniff_reader(stream)

        logger.info(
            f"Sniffed {filepath}: delimiter={metadata.dialect.delimiter!r}, "
            f"{metadata.num_fields} fields"
        )
        return metadata

    def sniff_reader(self, stream) -> Metadata:
        """Sniff a seekable stream; it is rewound to the start before returning."""
        self._advance(SniffStage.START)
        draft = DialectDraft()

        with rewound(stream):
            sample = self.sampler.sample(stream)
            draft.commit("terminator", sample.terminator)
            lines = sample.lines
            self._advance(SniffStage.SAMPLED)

            if self.delimiter is not None:
                draft.commit("delimiter", self.delimiter)
            else:
                self.delimiter_detector.detect(lines, draft)
            self._advance(SniffStage.DELIMITER_KNOWN)

            if self.quote is not None:
                draft.commit("quote", self.quote)
            self.quote_detector.detect(lines, draft)
            lines = self.comment_detector.detect(lines, draft)
            self._advance(SniffStage.QUOTE_ESCAPE_KNOWN)

            shape = self.shape_analyzer.detect(lines, draft)
            self._advance(SniffStage.SHAPE_KNOWN)

            header = self.header_detector.detect(shape, draft)
            self._advance(SniffStage.HEADER_KNOWN)

            data_rows = shape.rows[1:] if header.has_header_row else shape.rows
            types = self.type_inferencer.infer_types(data_rows, shape.num_fields)
            self._advance(SniffStage.TYPES_KNOWN)

            metadata = Metadata(
                dialect=draft.build(), num_fields=shape.num_fields, types=types
            )
            self._advance(SniffStage.DONE)

        logger.info(
            f"Detected dialect: delimiter={metadata.dialect.delimiter!r}, "
            f"quote={metadata.dialect.quote!r}, header={header.has_header_row}, "
            f"preamble={header.num_preamble_rows}, flexible={metadata.dialect.flexible}"
        )
        return metadata


def sniff_path(filepath, **options) -> Metadata:
    return Sniffer(**options).sniff_path(filepath)


def sniff_reader(stream, **options) -> Metadata:
    return Sniffer(**options).sniff_reader(stream)
