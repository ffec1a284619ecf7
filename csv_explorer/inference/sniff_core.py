import csv
from enum import Enum, IntEnum
from dataclasses import dataclass, field


class Type(IntEnum):
    """Inferred column type. Ordered from most to least specific."""

    BOOLEAN = 0
    INTEGER = 1
    FLOAT = 2
    TEXT = 3

    @classmethod
    def join(cls, *types):
        """Least common supertype of the given types (TEXT absorbs all)."""
        return max(types) if types else cls.TEXT

    def __str__(self):
        return self.name.capitalize()


class SniffStage(Enum):
    START = "start"
    SAMPLED = "sampled"
    DELIMITER_KNOWN = "delimiter_known"
    QUOTE_ESCAPE_KNOWN = "quote_escape_known"
    SHAPE_KNOWN = "shape_known"
    HEADER_KNOWN = "header_known"
    TYPES_KNOWN = "types_known"
    DONE = "done"


def _check_char(char, what):
    if char is not None and (not isinstance(char, str) or len(char) != 1):
        raise ValueError(f"{what} must be a single character, got {char!r}")


@dataclass(frozen=True)
class Quote:
    char: str = None

    def __post_init__(self):
        _check_char(self.char, "Quote character")

    @classmethod
    def some(cls, char):
        return cls(char)

    @property
    def is_enabled(self):
        return self.char is not None

    def __repr__(self):
        return f"Quote.some({self.char!r})" if self.is_enabled else "Quote.NONE"


@dataclass(frozen=True)
class Escape:
    char: str = None

    def __post_init__(self):
        _check_char(self.char, "Escape character")

    @classmethod
    def enabled(cls, char):
        return cls(char)

    @property
    def is_enabled(self):
        return self.char is not None

    def __repr__(self):
        return f"Escape.enabled({self.char!r})" if self.is_enabled else "Escape.DISABLED"


@dataclass(frozen=True)
class Comment:
    char: str = None

    def __post_init__(self):
        _check_char(self.char, "Comment character")

    @classmethod
    def enabled(cls, char):
        return cls(char)

    @property
    def is_enabled(self):
        return self.char is not None

    def __repr__(self):
        return f"Comment.enabled({self.char!r})" if self.is_enabled else "Comment.DISABLED"


@dataclass(frozen=True)
class Terminator:
    """Record terminator: CRLF (char is None) or an arbitrary single character."""

    char: str = None

    def __post_init__(self):
        _check_char(self.char, "Terminator character")

    @classmethod
    def any(cls, char):
        return cls(char)

    @property
    def is_crlf(self):
        return self.char is None

    @property
    def line_terminator(self):
        return "\r\n" if self.is_crlf else self.char

    def __repr__(self):
        return "Terminator.CRLF" if self.is_crlf else f"Terminator.any({self.char!r})"


Quote.NONE = Quote()
Escape.DISABLED = Escape()
Comment.DISABLED = Comment()
Terminator.CRLF = Terminator()


@dataclass(frozen=True)
class Header:
    """Header row flag plus the number of rows before the header (or first data row).

    ``confident`` is False when the header decision is a default taken without
    enough rows to compare; it does not take part in equality.
    """

    has_header_row: bool
    num_preamble_rows: int
    confident: bool = field(default=True, compare=False)


@dataclass(frozen=True)
class Dialect:

    delimiter: str
    header: Header
    quote: Quote
    doublequote_escapes: bool
    escape: Escape
    comment: Comment
    flexible: bool
    terminator: Terminator = Terminator.CRLF

    def __post_init__(self):
        _check_char(self.delimiter, "Delimiter")
        markers = [
            ("delimiter", self.delimiter),
            ("quote", self.quote.char),
            ("escape", self.escape.char),
            ("comment", self.comment.char),
        ]
        seen = {}
        for name, char in markers:
            if char is None:
                continue
            if char in seen:
                raise ValueError(
                    f"{name} and {seen[char]} cannot share the character {char!r}"
                )
            seen[char] = name

    def to_csv_kwargs(self):
        """Keyword arguments for ``csv.reader`` matching this dialect."""
        kwargs = {
            "delimiter": self.delimiter,
            "doublequote": self.doublequote_escapes,
            "escapechar": self.escape.char,
            "lineterminator": self.terminator.line_terminator,
            "strict": False,
        }
        if self.quote.is_enabled:
            kwargs["quotechar"] = self.quote.char
            kwargs["quoting"] = csv.QUOTE_MINIMAL
        else:
            kwargs["quotechar"] = None
            kwargs["quoting"] = csv.QUOTE_NONE
        return kwargs

    def open_path(self, path):
        from ..reader.dialect_reader import open_path

        return open_path(path, self)

    def open_reader(self, stream):
        from ..reader.dialect_reader import DelimitedRecordReader

        return DelimitedRecordReader(stream, self)


@dataclass(frozen=True)
class Metadata:

    dialect: Dialect
    num_fields: int
    types: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "types", tuple(self.types))
        if len(self.types) != self.num_fields:
            raise ValueError(
                f"Expected {self.num_fields} types, got {len(self.types)}"
            )
