from .base_detector import BaseDialectDetector
from .errors import NoDelimiterFoundError

import logging

logger = logging.getLogger(__name__)

DEFAULT_DELIMITERS = (",", "\t", ";", "|", ":")
DEFAULT_COVERAGE_THRESHOLD = 0.9


class DelimiterAnalysis:
    """Field-count statistics for one candidate delimiter over the sample."""

    def __init__(self, delimiter, priority):
        self.delimiter = delimiter
        self.priority = priority
        self.field_counts = []
        self.mode = 0
        self.coverage = 0.0

    def add_line(self, line):
        self.field_counts.append(line.count(self.delimiter) + 1)

    def finalize(self):
        if not self.field_counts:
            return self

        self.mode = BaseDialectDetector.dominant_count(self.field_counts)

        # leading lines of another shape are preamble, not evidence against
        first = self.field_counts.index(self.mode)
        body = self.field_counts[first:]
        consistent = sum(1 for count in body if count == self.mode)
        self.coverage = BaseDialectDetector.calculate_line_coverage(consistent, len(body))
        return self

    @property
    def is_delimiting(self):
        return self.mode > 1

    @property
    def score(self):
        return (self.coverage, self.mode, -self.priority)


class DelimiterDetector(BaseDialectDetector):

    def __init__(self, delimiters=None, threshold=DEFAULT_COVERAGE_THRESHOLD):
        super().__init__()
        self.delimiters = tuple(delimiters or DEFAULT_DELIMITERS)
        if not self.delimiters:
            raise ValueError("At least one candidate delimiter is required")
        for delimiter in self.delimiters:
            if len(delimiter) != 1:
                raise ValueError(f"Delimiter must be a single character: {delimiter!r}")
        if not 0.0 < threshold <= 1.0:
            raise ValueError(f"Coverage threshold must be in (0, 1]: {threshold}")
        self.threshold = threshold

    def analyze(self, lines):
        """Score every candidate; returns analyses in candidate priority order."""
        content = self.content_lines(lines)
        analyses = []
        for priority, delimiter in enumerate(self.delimiters):
            analysis = DelimiterAnalysis(delimiter, priority)
            for line in content:
                analysis.add_line(line)
            analyses.append(analysis.finalize())
            logger.debug(
                f"Delimiter {delimiter!r}: mode={analysis.mode}, "
                f"coverage={analysis.coverage:.3f}"
            )
        return analyses

    def detect(self, lines, draft):
        analyses = self.analyze(lines)
        surviving = [a for a in analyses if a.is_delimiting]
        best = max(surviving, key=lambda a: a.score) if surviving else None

        if best is None or best.coverage < self.threshold:
            raise NoDelimiterFoundError(
                {a.delimiter: (a.mode, a.coverage) for a in analyses}, self.threshold
            )

        logger.debug(
            f"Selected delimiter {best.delimiter!r} "
            f"(mode={best.mode}, coverage={best.coverage:.3f})"
        )
        draft.commit("delimiter", best.delimiter)
        return best
