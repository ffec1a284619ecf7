import csv
import io

import pytest

from csv_explorer.inference.errors import RecordWidthError, SampleReadError
from csv_explorer.inference.sniff_core import (
    Comment,
    Dialect,
    Escape,
    Header,
    Quote,
    Terminator,
)
from csv_explorer.reader.dialect_reader import DelimitedRecordReader, open_path


def make_dialect(**overrides):
    fields = dict(
        delimiter=",",
        header=Header(has_header_row=True, num_preamble_rows=0),
        quote=Quote.some('"'),
        doublequote_escapes=True,
        escape=Escape.DISABLED,
        comment=Comment.DISABLED,
        flexible=False,
        terminator=Terminator.CRLF,
    )
    fields.update(overrides)
    return Dialect(**fields)


@pytest.fixture
def gdp_file(tmp_path):
    path = tmp_path / "gdp.csv"
    path.write_bytes(
        b'"Data Source","World Development Indicators",\r\n'
        b"\r\n"
        b'"Last Updated Date","2017-01-03",\r\n'
        b"\r\n"
        b'"Country Name","Country Code","1960"\r\n'
        b'"Aruba","ABW",""\r\n'
        b'"Korea, ""Rep.""","KOR","3.9"\r\n'
    )
    return path


def test_open_path_skips_preamble_and_header(gdp_file):
    dialect = make_dialect(header=Header(has_header_row=True, num_preamble_rows=4))

    with dialect.open_path(gdp_file) as reader:
        records = list(reader)

    assert reader.header == ["Country Name", "Country Code", "1960"]
    assert records == [["Aruba", "ABW", ""], ['Korea, "Rep."', "KOR", "3.9"]]


def test_read_header_without_iterating(gdp_file):
    dialect = make_dialect(header=Header(has_header_row=True, num_preamble_rows=4))

    with open_path(gdp_file, dialect) as reader:
        assert reader.read_header() == ["Country Name", "Country Code", "1960"]
        assert reader.records_read == 1


def test_no_header_yields_first_row():
    dialect = make_dialect(header=Header(has_header_row=False, num_preamble_rows=0))

    with DelimitedRecordReader(io.BytesIO(b"1,2\n3,4\n"), dialect) as reader:
        assert list(reader) == [["1", "2"], ["3", "4"]]
        assert reader.header is None


def test_width_change_is_an_error():
    dialect = make_dialect(header=Header(has_header_row=False, num_preamble_rows=0))

    with DelimitedRecordReader(io.BytesIO(b"a,b\n1,2\n3\n"), dialect) as reader:
        with pytest.raises(RecordWidthError) as excinfo:
            list(reader)

    assert excinfo.value.expected == 2
    assert excinfo.value.found == 1
    assert excinfo.value.line_number == 3


def test_flexible_dialect_allows_width_change():
    dialect = make_dialect(
        header=Header(has_header_row=False, num_preamble_rows=0), flexible=True
    )

    with DelimitedRecordReader(io.BytesIO(b"a,b\n1,2\n3\n"), dialect) as reader:
        assert list(reader)[-1] == ["3"]


def test_comment_lines_and_blank_lines_are_skipped():
    dialect = make_dialect(comment=Comment.enabled("#"))
    data = b"# note\nid,v\n\n1,a\n# inline note\n2,b\n"

    with DelimitedRecordReader(io.BytesIO(data), dialect) as reader:
        assert list(reader) == [["1", "a"], ["2", "b"]]
        assert reader.header == ["id", "v"]


def test_unquoted_dialect_keeps_quote_characters():
    dialect = make_dialect(
        header=Header(has_header_row=False, num_preamble_rows=0), quote=Quote.NONE
    )

    with DelimitedRecordReader(io.StringIO('"a",b\n'), dialect) as reader:
        assert list(reader) == [['"a"', "b"]]


def test_caller_stream_stays_open():
    stream = io.BytesIO(b"a,b\n1,2\n")

    with make_dialect().open_reader(stream) as reader:
        list(reader)

    assert not stream.closed


def test_owned_stream_is_closed(gdp_file):
    reader = open_path(gdp_file, make_dialect())
    reader.close()

    assert reader._stream.closed


def test_open_missing_path(tmp_path):
    with pytest.raises(SampleReadError):
        open_path(tmp_path / "missing.csv", make_dialect())


def test_csv_kwargs():
    kwargs = make_dialect(escape=Escape.enabled("\\"), doublequote_escapes=False).to_csv_kwargs()

    assert kwargs["delimiter"] == ","
    assert kwargs["quotechar"] == '"'
    assert kwargs["quoting"] == csv.QUOTE_MINIMAL
    assert kwargs["escapechar"] == "\\"
    assert kwargs["doublequote"] is False
    assert kwargs["lineterminator"] == "\r\n"


def test_csv_kwargs_without_quoting():
    kwargs = make_dialect(quote=Quote.NONE, terminator=Terminator.any("\n")).to_csv_kwargs()

    assert kwargs["quoting"] == csv.QUOTE_NONE
    assert kwargs["quotechar"] is None
    assert kwargs["lineterminator"] == "\n"


@pytest.mark.parametrize(
    "overrides",
    [
        {"quote": Quote.some(",")},
        {"escape": Escape.enabled('"')},
        {"comment": Comment.enabled(",")},
        {"delimiter": ";;"},
    ],
)
def test_dialect_markers_must_be_disjoint(overrides):
    with pytest.raises(ValueError):
        make_dialect(**overrides)


def test_terminator_equality():
    assert Terminator.CRLF == Terminator()
    assert Terminator.any("\n") == Terminator.any("\n")
    assert Terminator.any("\n") != Terminator.CRLF
    assert make_dialect(terminator=Terminator.any(";")) != make_dialect()


def test_marker_flags():
    assert Quote.some('"').is_enabled
    assert not Quote.NONE.is_enabled
    assert Escape.enabled("\\").is_enabled
    assert not Escape.DISABLED.is_enabled
    assert Comment.enabled("#").is_enabled
    assert not Comment.DISABLED.is_enabled
