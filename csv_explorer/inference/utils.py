import gzip
import bz2
import lzma
from pathlib import Path

import logging

logger = logging.getLogger(__name__)


class CompressionHandler:

    COMPRESSION_MAP = {".gz": "gzip", ".bz2": "bz2", ".xz": "xz", ".lzma": "lzma"}

    @classmethod
    def detect_compression(cls, filepath):
        suffix = Path(filepath).suffix.lower()
        return cls.COMPRESSION_MAP.get(suffix)

    @classmethod
    def open_binary(cls, filepath):
        """Open ``filepath`` as a seekable binary stream, decompressing by suffix."""
        compression = cls.detect_compression(filepath)

        try:
            if compression == "gzip":
                return gzip.open(filepath, "rb")
            elif compression == "bz2":
                return bz2.open(filepath, "rb")
            elif compression in ("xz", "lzma"):
                return lzma.open(filepath, "rb")
            else:
                return open(filepath, "rb")
        except OSError as e:
            logger.error(f"Error opening file {filepath}: {e}")
            raise
