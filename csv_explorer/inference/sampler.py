import codecs
import re
from dataclasses import dataclass, field

from .sniff_core import Terminator
from .errors import SampleReadError, SampleDecodeError, EmptyInputError

import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_LINES = 1000
DEFAULT_MAX_BYTES = 1 << 20

LINE_TERMINATOR_PATTERN = re.compile(r"\r\n|\n|\r")


@dataclass
class Sample:

    lines: list = field(default_factory=list)
    terminator: Terminator = Terminator.CRLF
    truncated: bool = False
    bytes_read: int = 0


class Sampler:
    """Reads a bounded prefix of a stream and splits it into lines.

    Sampling stops at ``max_lines`` lines or ``max_bytes`` bytes, whichever
    comes first. When the byte cap cuts a line in half the partial line is
    dropped, unless it is the only line in the sample.
    """

    def __init__(self, max_lines=DEFAULT_MAX_LINES, max_bytes=DEFAULT_MAX_BYTES):
        if max_lines < 1:
            raise ValueError(f"max_lines must be positive, got {max_lines}")
        if max_bytes < 1:
            raise ValueError(f"max_bytes must be positive, got {max_bytes}")
        self.max_lines = max_lines
        self.max_bytes = max_bytes

    def sample(self, stream) -> Sample:
        data, truncated = self._read_prefix(stream)
        text = self._decode(data, truncated)

        if truncated and text.endswith("\r"):
            # may be the first half of a CRLF pair
            text = text[:-1]

        lines, terminators, tail = self.split_lines(text)
        if tail:
            if truncated and lines:
                logger.debug("Dropping partial line cut by the byte limit")
            else:
                lines.append(tail)

        if len(lines) > self.max_lines:
            lines = lines[: self.max_lines]
            truncated = True
        terminators = terminators[: len(lines)]

        if not any(line.strip() for line in lines):
            raise EmptyInputError("Input contains no lines to sniff")

        terminator = self.detect_terminator(terminators)
        logger.debug(
            f"Sampled {len(lines)} lines ({len(data)} bytes, truncated={truncated}, "
            f"terminator={terminator!r})"
        )
        return Sample(
            lines=lines,
            terminator=terminator,
            truncated=truncated,
            bytes_read=len(data),
        )

    def _read_prefix(self, stream):
        chunks = []
        remaining = self.max_bytes
        try:
            stream.seek(0)
            while remaining > 0:
                chunk = stream.read(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
            truncated = remaining <= 0 and bool(stream.read(1))
        except OSError as e:
            raise SampleReadError(f"Failed to read sample: {e}") from e

        data = chunks[0][:0].join(chunks) if chunks else b""
        return data, truncated

    @staticmethod
    def _decode(data, truncated):
        if isinstance(data, str):
            return data.lstrip("\ufeff")

        decoder = codecs.getincrementaldecoder("utf-8-sig")()
        try:
            # an incomplete multi-byte sequence at a cut is not an error
            return decoder.decode(data, final=not truncated)
        except UnicodeDecodeError as e:
            raise SampleDecodeError(
                f"Sample is not valid UTF-8 text at byte {e.start}: {e.reason}"
            ) from e

    @staticmethod
    def split_lines(text):
        """Split ``text`` on CRLF, LF or CR.

        Returns the complete lines, the terminator that ended each of them, and
        the unterminated tail (empty when the text ends with a terminator).
        """
        lines = []
        terminators = []
        start = 0
        for match in LINE_TERMINATOR_PATTERN.finditer(text):
            lines.append(text[start : match.start()])
            terminators.append(match.group())
            start = match.end()
        return lines, terminators, text[start:]

    @staticmethod
    def detect_terminator(terminators):
        kinds = set(terminators)
        if kinds == {"\n"}:
            return Terminator.any("\n")
        if kinds == {"\r"}:
            return Terminator.any("\r")
        return Terminator.CRLF
