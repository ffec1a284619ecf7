class SniffError(Exception):
    """Base class for all errors raised while sniffing or reading a delimited file."""

    pass


class SampleReadError(SniffError, OSError):
    """The input could not be opened, read or rewound."""

    pass


class SampleDecodeError(SniffError, ValueError):
    """The sampled bytes are not valid text."""

    pass


class EmptyInputError(SniffError, ValueError):
    """The sample contains no lines."""

    pass


class NoDelimiterFoundError(SniffError, ValueError):
    """No candidate delimiter reached the coverage threshold.

    ``candidates`` maps each attempted delimiter to its ``(mode, coverage)``.
    """

    def __init__(self, candidates, threshold):
        self.candidates = dict(candidates)
        self.threshold = threshold
        attempted = ", ".join(
            f"{delimiter!r} (mode={mode}, coverage={coverage:.2f})"
            for delimiter, (mode, coverage) in self.candidates.items()
        )
        super().__init__(
            f"No delimiter reached coverage {threshold:.2f}; tried: {attempted or 'none'}"
        )


class RecordWidthError(SniffError, ValueError):
    """A record's field count changed in a dialect that is not flexible."""

    def __init__(self, line_number, expected, found):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        super().__init__(
            f"Record {line_number} has {found} fields, expected {expected}"
        )
