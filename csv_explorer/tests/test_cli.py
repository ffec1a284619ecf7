import pytest

from csv_explorer.cli import main


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "people.csv"
    path.write_text("name,age\nbob,31\namy,27\njoe,45\n", encoding="utf-8")
    return path


def test_prints_report(csv_file, capsys):
    assert main([str(csv_file)]) == 0

    out, err = capsys.readouterr()
    assert out.startswith("Metadata\n========\n")
    assert "\tDelimiter: ,\n" in out
    assert "\tHas header row?: true\n" in out
    assert "Number of fields: 2\n" in out
    assert "\t0: Text\n\t1: Integer\n" in out
    assert err == ""


def test_missing_file_exits_non_zero(tmp_path, capsys):
    assert main([str(tmp_path / "missing.csv")]) == 1

    out, err = capsys.readouterr()
    assert out == ""
    assert err.startswith("ERROR: File not found")


def test_undelimited_file_exits_non_zero(tmp_path, capsys):
    path = tmp_path / "notes.txt"
    path.write_text("just some words\nand some more\n", encoding="utf-8")

    assert main([str(path)]) == 1

    _, err = capsys.readouterr()
    assert "ERROR: No delimiter reached coverage" in err


def test_path_is_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])

    assert excinfo.value.code == 2
