from dataclasses import dataclass, field

from .base_detector import BaseDialectDetector

import logging

logger = logging.getLogger(__name__)


def split_fields(line, delimiter, quote=None, doublequote=True, escape=None):
    """Split one line into unquoted field values.

    A quote only opens a quoted span at the start of a field. Inside a span the
    delimiter does not split, and a doubled quote (when ``doublequote``) or an
    escaped quote does not close it. The escape character also escapes the next
    character outside quoted spans.
    """
    fields = []
    buf = []
    in_quotes = False
    field_start = True
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if escape is not None and ch == escape and i + 1 < n:
            buf.append(line[i + 1])
            field_start = False
            i += 2
            continue

        if in_quotes:
            if ch == quote:
                if doublequote and i + 1 < n and line[i + 1] == quote:
                    buf.append(quote)
                    i += 2
                    continue
                in_quotes = False
            else:
                buf.append(ch)
        elif ch == delimiter:
            fields.append("".join(buf))
            buf = []
            field_start = True
            i += 1
            continue
        elif quote is not None and ch == quote and field_start:
            in_quotes = True
        else:
            buf.append(ch)

        field_start = False
        i += 1

    fields.append("".join(buf))
    return fields


@dataclass
class Shape:

    num_fields: int
    num_preamble_rows: int
    flexible: bool
    rows: list = field(default_factory=list)


class ShapeAnalyzer(BaseDialectDetector):

    def split(self, line, draft):
        return split_fields(
            line,
            draft["delimiter"],
            quote=draft["quote"].char,
            doublequote=draft["doublequote_escapes"],
            escape=draft["escape"].char,
        )

    def detect(self, lines, draft) -> Shape:
        """Split ``lines`` (comment lines already removed) and find their shape."""
        split_lines = [
            self.split(line, draft) if line.strip() else None for line in lines
        ]
        counts = [len(fields) for fields in split_lines if fields is not None]
        num_fields = self.dominant_count(counts)

        num_preamble_rows = 0
        for fields in split_lines:
            if fields is not None and len(fields) == num_fields:
                break
            num_preamble_rows += 1

        rows = [
            fields for fields in split_lines[num_preamble_rows:] if fields is not None
        ]
        flexible = any(len(fields) != num_fields for fields in rows)

        logger.debug(
            f"Shape: {num_fields} fields, {num_preamble_rows} preamble rows, "
            f"flexible={flexible}"
        )
        draft.commit("flexible", flexible)
        return Shape(
            num_fields=num_fields,
            num_preamble_rows=num_preamble_rows,
            flexible=flexible,
            rows=rows,
        )
