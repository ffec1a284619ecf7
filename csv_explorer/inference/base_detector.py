from abc import ABC, abstractmethod
from collections import Counter

from .sniff_core import Dialect


class DialectDraft:
    """Dialect fields committed so far by the sniffing stages.

    Each field may be committed once; a later stage can read it but never
    replace it.
    """

    FIELDS = (
        "delimiter",
        "quote",
        "doublequote_escapes",
        "escape",
        "comment",
        "terminator",
        "flexible",
        "header",
    )

    def __init__(self):
        self._values = {}

    def commit(self, name, value):
        if name not in self.FIELDS:
            raise KeyError(f"Unknown dialect field: {name}")
        if name in self._values:
            raise RuntimeError(f"Dialect field {name!r} is already committed")
        self._values[name] = value

    def is_committed(self, name):
        return name in self._values

    def __getitem__(self, name):
        try:
            return self._values[name]
        except KeyError:
            raise KeyError(f"Dialect field {name!r} is not committed yet") from None

    def build(self) -> Dialect:
        missing = [name for name in self.FIELDS if name not in self._values]
        if missing:
            raise RuntimeError(f"Dialect is incomplete, missing: {', '.join(missing)}")
        return Dialect(**self._values)


class BaseDialectDetector(ABC):

    def __init__(self):
        self.name = self.__class__.__name__

    @abstractmethod
    def detect(self, lines, draft):
        """Inspect the sample lines and commit the fields this stage owns."""
        pass

    def content_lines(self, lines):
        """Lines that carry data; blank lines never count for or against a shape."""
        return [line for line in lines if line.strip()]

    @staticmethod
    def calculate_line_coverage(matches, total_lines):
        """Fraction of lines with the expected shape; 0.0 when there are none."""
        return matches / total_lines if total_lines > 0 else 0.0

    @staticmethod
    def dominant_count(counts):
        """Most frequent value in ``counts``; ties go to the larger value."""
        if not counts:
            return 0
        frequencies = Counter(counts)
        return max(frequencies, key=lambda count: (frequencies[count], count))
