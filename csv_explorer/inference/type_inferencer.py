import re

from .sniff_core import Type

BOOLEAN_TOKENS = frozenset(("true", "false", "yes", "no", "1", "0"))

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class TypeInferencer:

    @staticmethod
    def infer_value_type(value):
        """Classify a single field value; None for an empty value."""
        value = value.strip()
        if not value:
            return None

        if value.lower() in BOOLEAN_TOKENS:
            return Type.BOOLEAN
        if INTEGER_PATTERN.fullmatch(value):
            return Type.INTEGER
        if FLOAT_PATTERN.fullmatch(value):
            return Type.FLOAT
        return Type.TEXT

    @classmethod
    def infer_column_type(cls, values):
        """Join of the value types; a column without any non-empty value is TEXT."""
        types = [t for t in map(cls.infer_value_type, values) if t is not None]
        return Type.join(*types)

    @classmethod
    def infer_types(cls, rows, num_fields):
        """One type per column; short rows leave their missing columns untouched."""
        columns = [[] for _ in range(num_fields)]
        for row in rows:
            for idx, value in enumerate(row[:num_fields]):
                columns[idx].append(value)
        return tuple(cls.infer_column_type(values) for values in columns)
