from .sniff_core import Header, Type
from .type_inferencer import TypeInferencer

import logging

logger = logging.getLogger(__name__)


class HeaderDetector:
    """Decides whether the first well-shaped row holds column labels.

    The first row is a header when, in at least one column, its value is of a
    more general type than every value below it (a text label above numbers).
    """

    def __init__(self, type_inferencer=None):
        self.name = self.__class__.__name__
        self.type_inferencer = type_inferencer or TypeInferencer()

    def detect(self, shape, draft) -> Header:
        rows = shape.rows
        if len(rows) < 2:
            logger.warning(
                f"Only {len(rows)} row(s) after the preamble; "
                "assuming no header row (low confidence)"
            )
            header = Header(
                has_header_row=False,
                num_preamble_rows=shape.num_preamble_rows,
                confident=False,
            )
            draft.commit("header", header)
            return header

        first, rest = rows[0], rows[1:]
        aggregate = self.type_inferencer.infer_types(rest, shape.num_fields)

        has_header_row = False
        for idx, value in enumerate(first[: shape.num_fields]):
            first_type = self.type_inferencer.infer_value_type(value)
            if first_type is None or not self._has_values(rest, idx):
                continue
            if Type.join(first_type, aggregate[idx]) != aggregate[idx]:
                logger.debug(
                    f"Column {idx}: first row is {first_type!s}, "
                    f"rows below are {aggregate[idx]!s}"
                )
                has_header_row = True
                break

        header = Header(
            has_header_row=has_header_row, num_preamble_rows=shape.num_preamble_rows
        )
        draft.commit("header", header)
        return header

    def _has_values(self, rows, idx):
        return any(idx < len(row) and row[idx].strip() for row in rows)
