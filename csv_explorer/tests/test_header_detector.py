import logging

import pytest

from csv_explorer.inference.base_detector import DialectDraft
from csv_explorer.inference.header_detector import HeaderDetector
from csv_explorer.inference.shape_analyzer import Shape
from csv_explorer.inference.sniff_core import Header


@pytest.fixture
def detector():
    return HeaderDetector()


def make_shape(rows, num_preamble_rows=0):
    return Shape(
        num_fields=max(len(row) for row in rows),
        num_preamble_rows=num_preamble_rows,
        flexible=False,
        rows=rows,
    )


def test_text_labels_above_numbers(detector):
    draft = DialectDraft()
    shape = make_shape([["name", "age"], ["bob", "31"], ["amy", "27"]])

    header = detector.detect(shape, draft)

    assert header == Header(has_header_row=True, num_preamble_rows=0)
    assert header.confident is True
    assert draft["header"] is header


def test_data_only(detector):
    shape = make_shape([["bob", "31"], ["amy", "27"], ["joe", "45"]])

    assert detector.detect(shape, DialectDraft()).has_header_row is False


def test_narrower_first_value_is_not_a_header(detector):
    # "1" classifies as Boolean, which the Integer column below subsumes
    shape = make_shape([["1"], ["5"], ["7"]])

    assert detector.detect(shape, DialectDraft()).has_header_row is False


def test_empty_first_values_give_no_evidence(detector):
    shape = make_shape([["", "x"], ["1", "y"], ["2", "z"]])

    assert detector.detect(shape, DialectDraft()).has_header_row is False


def test_column_without_values_gives_no_evidence(detector):
    shape = make_shape([["label", "id"], ["", "1"], ["", "2"]])

    header = detector.detect(shape, DialectDraft())

    assert header.has_header_row is True


def test_preamble_count_is_carried(detector):
    shape = make_shape([["year", "value"], ["2001", "1.5"], ["2002", "2.5"]], 3)

    header = detector.detect(shape, DialectDraft())

    assert header == Header(has_header_row=True, num_preamble_rows=3)


def test_single_row_is_low_confidence(detector, caplog):
    caplog.set_level(logging.WARNING)
    shape = make_shape([["name", "age"]], 2)

    header = detector.detect(shape, DialectDraft())

    assert header.has_header_row is False
    assert header.num_preamble_rows == 2
    assert header.confident is False
    assert "low confidence" in caplog.text


def test_confidence_is_not_part_of_equality():
    assert Header(False, 0, confident=False) == Header(False, 0)
