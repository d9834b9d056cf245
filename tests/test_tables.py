from pathlib import Path

import openpyxl
import pytest
from openpyxl.styles import Font

from tablecheck import ColumnNotFoundException, ConfigurationException, MalformedInputException
from tablecheck.io import read_delimited, read_table, rename_columns, to_delimited, write_xlsx


def test_read_delimited_drops_blank_lines() -> None:
    text = "Name,Email\nAlice,alice@example.com\n\n,\nBob,\n"
    assert read_delimited(text) == [
        ["Name", "Email"],
        ["Alice", "alice@example.com"],
        ["Bob", ""],
    ]


def test_read_delimited_custom_delimiter() -> None:
    assert read_delimited("a;b\n1;2", delimiter=";") == [["a", "b"], ["1", "2"]]


def test_to_delimited_quotes_and_blanks() -> None:
    table = [["Name", "Note"], ["Smith, J", None], ["Ann", "ok"]]
    assert to_delimited(table) == 'Name,Note\n"Smith, J",\nAnn,ok'
    assert read_delimited(to_delimited(table)) == [["Name", "Note"], ["Smith, J", ""], ["Ann", "ok"]]


def test_read_table_handles_csv(tmp_path: Path) -> None:
    csv_path = tmp_path / "values.csv"
    csv_path.write_text("\ufeffName,Email\nAlice,alice@example.com\n", encoding="utf-8")
    assert read_table(csv_path) == [["Name", "Email"], ["Alice", "alice@example.com"]]


def test_read_table_rejects_empty_and_unknown_files(tmp_path: Path) -> None:
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(MalformedInputException):
        read_table(empty)

    notes = tmp_path / "notes.txt"
    notes.write_text("a\n", encoding="utf-8")
    with pytest.raises(MalformedInputException):
        read_table(notes)


def test_read_table_handles_xlsx_values(tmp_path: Path) -> None:
    path = tmp_path / "users.xlsx"
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.append(["UserId", "Name", "Age"])
    sheet.append([1, "Ann", None])
    sheet.append([2, "Bob", 39])
    workbook.save(path)
    workbook.close()

    assert read_table(path) == [
        ["UserId", "Name", "Age"],
        ["1", "Ann", ""],
        ["2", "Bob", "39"],
    ]


def test_read_table_drops_empty_xlsx_rows(tmp_path: Path) -> None:
    path = tmp_path / "spaced.xlsx"
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.append(["UserId", "Name"])
    sheet.append([1, "Ann"])
    sheet.append(["", ""])
    sheet.append([2, "Bob"])
    sheet.cell(row=6, column=2).font = Font(bold=True)
    workbook.save(path)
    workbook.close()

    assert read_table(path) == [["UserId", "Name"], ["1", "Ann"], ["2", "Bob"]]


def test_read_table_drops_empty_csv_rows(tmp_path: Path) -> None:
    csv_path = tmp_path / "spaced.csv"
    csv_path.write_text("UserId,Name\n1,Ann\n,\n\n2,Bob\n,\n", encoding="utf-8")
    assert read_table(csv_path) == [["UserId", "Name"], ["1", "Ann"], ["2", "Bob"]]


def test_write_xlsx_replaces_only_the_named_sheet(tmp_path: Path) -> None:
    path = tmp_path / "out.xlsx"
    write_xlsx([["a", "b"], ["1", "2"]], path, "First")
    write_xlsx([["c"], ["3"]], path, "Second")
    write_xlsx([["a", "b"], ["9", "8"], ["7", "6"]], path, "First")

    assert read_table(path, "First") == [["a", "b"], ["9", "8"], ["7", "6"]]
    assert read_table(path, "Second") == [["c"], ["3"]]

    workbook = openpyxl.load_workbook(path)
    try:
        assert sorted(workbook.sheetnames) == ["First", "Second"]
    finally:
        workbook.close()


def test_write_xlsx_defaults_to_sheet1(tmp_path: Path) -> None:
    path = write_xlsx([["x"], ["1"]], tmp_path / "new.xlsx")
    assert read_table(path, "Sheet1") == [["x"], ["1"]]


def test_rename_columns_positionally() -> None:
    table = [["a", "b"], ["1", "2"]]
    assert rename_columns(table, ["UserId", "Name"]) is table
    assert table == [["UserId", "Name"], ["1", "2"]]

    with pytest.raises(ConfigurationException):
        rename_columns(table, ["only_one"])


def test_rename_columns_with_mapping() -> None:
    table = [["a", "b"], ["1", "2"]]
    rename_columns(table, {"b": "Name"})
    assert table[0] == ["a", "Name"]

    with pytest.raises(ColumnNotFoundException):
        rename_columns(table, {"missing": "x"})
    with pytest.raises(MalformedInputException):
        rename_columns([], ["x"])
