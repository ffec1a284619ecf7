from collections import Counter

from .base_detector import BaseDialectDetector
from .sniff_core import Quote, Escape, Comment

import logging

logger = logging.getLogger(__name__)

DEFAULT_QUOTE_CHARS = ('"', "'")
DEFAULT_COMMENT_CHARS = ("#", "%")


def find_closing_quote(line, start, delimiter, quote):
    """Index of the quote closing a span opened just before ``start``, or None.

    A closing quote sits right before a delimiter or at the end of the line.
    Doubled quotes inside the span are skipped, except for a final pair that
    ends the line or field, where the second quote closes the span.
    """
    n = len(line)
    j = start
    while j < n:
        if line[j] != quote:
            j += 1
            continue
        if j + 1 == n or line[j + 1] == delimiter:
            return j
        if line[j + 1] == quote:
            if j + 2 == n or line[j + 2] == delimiter:
                return j + 1
            j += 2
            continue
        j += 1
    return None


def quoted_spans(line, delimiter, quote):
    """Yield the content of each span opened by ``quote`` at a field start.

    Unmatched openings yield None.
    """
    n = len(line)
    i = 0
    field_start = True
    while i < n:
        ch = line[i]
        if field_start and ch == quote:
            close = find_closing_quote(line, i + 1, delimiter, quote)
            if close is None:
                yield None
                next_delimiter = line.find(delimiter, i + 1)
                if next_delimiter < 0:
                    return
                i = next_delimiter + 1
                continue
            yield line[i + 1 : close]
            i = close + 1
            field_start = False
            continue
        field_start = ch == delimiter
        i += 1


class QuoteEscapeDetector(BaseDialectDetector):

    def __init__(self, quote_candidates=None):
        super().__init__()
        self.quote_candidates = tuple(quote_candidates or DEFAULT_QUOTE_CHARS)

    def detect(self, lines, draft):
        delimiter = draft["delimiter"]
        content = self.content_lines(lines)

        # a caller-supplied quote is committed before this stage runs
        if not draft.is_committed("quote"):
            draft.commit("quote", self.detect_quote(content, delimiter))
        quote = draft["quote"]

        doublequote_escapes, escape = self.detect_escape(content, delimiter, quote)
        draft.commit("doublequote_escapes", doublequote_escapes)
        draft.commit("escape", escape)
        return quote

    def count_quoted_fields(self, lines, delimiter, quote):
        opened = 0
        matched = 0
        for line in lines:
            for span in quoted_spans(line, delimiter, quote):
                opened += 1
                if span is not None:
                    matched += 1
        return opened, matched

    def detect_quote(self, lines, delimiter) -> Quote:
        chosen = None
        chosen_matches = 0

        for candidate in self.quote_candidates:
            if candidate == delimiter:
                continue
            opened, matched = self.count_quoted_fields(lines, delimiter, candidate)
            logger.debug(f"Quote {candidate!r}: {matched}/{opened} openings matched")

            if not opened or matched * 2 <= opened:
                continue
            if chosen is None:
                chosen, chosen_matches = candidate, matched
            elif matched >= chosen_matches:
                logger.debug(
                    f"Ambiguous quote: {candidate!r} ({matched} spans) is as well "
                    f"supported as {chosen!r} ({chosen_matches} spans); keeping {chosen!r}"
                )

        return Quote.some(chosen) if chosen else Quote.NONE

    def detect_escape(self, lines, delimiter, quote):
        """Return ``(doublequote_escapes, escape)`` for the quoted spans in ``lines``.

        ``doublequote_escapes`` is True only when a doubled quote appears in the
        sample, so a ``""`` that first shows up past the sampled window is read
        by the record reader as two separate quotes.
        """
        if not quote.is_enabled:
            return False, Escape.DISABLED

        q = quote.char
        doubled = False
        inner_quotes = 0
        preceding = Counter()

        for line in lines:
            for span in quoted_spans(line, delimiter, q):
                if not span:
                    continue
                if q * 2 in span:
                    doubled = True
                    continue
                for k, ch in enumerate(span):
                    if ch != q:
                        continue
                    inner_quotes += 1
                    if k > 0:
                        preceding[span[k - 1]] += 1

        if doubled:
            logger.debug("Doubled quotes found inside quoted fields")
            return True, Escape.DISABLED

        if inner_quotes and preceding:
            char, count = preceding.most_common(1)[0]
            if (
                count == inner_quotes
                and not char.isalnum()
                and not char.isspace()
                and char not in (delimiter, q)
            ):
                logger.debug(f"Escape character {char!r} precedes every inner quote")
                return False, Escape.enabled(char)

        return False, Escape.DISABLED


class CommentDetector(BaseDialectDetector):
    """Finds a comment marker heading a contiguous block of anomalous lines."""

    def __init__(self, comment_candidates=None):
        super().__init__()
        self.comment_candidates = tuple(comment_candidates or DEFAULT_COMMENT_CHARS)

    def detect(self, lines, draft):
        """Commit the comment marker; returns ``lines`` without comment lines."""
        delimiter = draft["delimiter"]
        taken = {delimiter, draft["quote"].char, draft["escape"].char}
        content = self.content_lines(lines)
        dominant = self.dominant_count([line.count(delimiter) + 1 for line in content])

        for candidate in self.comment_candidates:
            if candidate in taken:
                continue
            if self.is_comment_marker(lines, candidate, delimiter, dominant, len(content)):
                logger.debug(f"Comment character {candidate!r} confirmed")
                draft.commit("comment", Comment.enabled(candidate))
                return [line for line in lines if not line.startswith(candidate)]

        draft.commit("comment", Comment.DISABLED)
        return lines

    def is_comment_marker(self, lines, candidate, delimiter, dominant, content_count):
        indices = [i for i, line in enumerate(lines) if line.startswith(candidate)]
        if not indices or len(indices) * 2 >= content_count:
            return False

        block = lines[indices[0] : indices[-1] + 1]
        if any(line.strip() and not line.startswith(candidate) for line in block):
            return False

        return any(lines[i].count(delimiter) + 1 != dominant for i in indices)
