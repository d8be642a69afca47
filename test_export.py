"""
Tests for the export layer (JSON, CSV, Markdown, SQL).
"""
import csv
import io
import json

import pytest

from src.export import (
    export_to_json,
    export_to_csv,
    export_to_markdown,
    export_to_sql,
    available_formats,
    classify,
    format_number,
    format_text_value,
    format_sql_value,
    infer_sql_type,
    CellKind,
    EmptyDatasetError,
    ExportError,
    JsonExportError,
)


# =============================================================================
# JSON
# =============================================================================

def test_json_contains_fields_data_and_count(sample_rows, sample_fields):
    document = json.loads(export_to_json(sample_rows, sample_fields))

    assert document["fields"] == sample_fields
    assert document["data"] == sample_rows
    assert document["count"] == 2


def test_json_is_pretty_printed(sample_rows, sample_fields):
    text = export_to_json(sample_rows, sample_fields).decode("utf-8")

    assert "\n" in text
    assert '\n  "count": 2' in text


def test_json_empty_rows_is_not_an_error():
    document = json.loads(export_to_json([], ["id"]))

    assert document == {"fields": ["id"], "data": [], "count": 0}


def test_json_keeps_non_ascii_text():
    text = export_to_json([{"city": "Zürich"}], ["city"]).decode("utf-8")

    assert "Zürich" in text


def test_json_unencodable_value_raises():
    with pytest.raises(JsonExportError):
        export_to_json([{"blob": object()}], ["blob"])


@pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
def test_json_non_finite_number_raises(number):
    with pytest.raises(JsonExportError):
        export_to_json([{"x": number}], ["x"])


# =============================================================================
# CSV
# =============================================================================

def test_csv_header_and_rows(sample_rows, sample_fields):
    lines = export_to_csv(sample_rows, sample_fields).decode("utf-8").splitlines()

    assert lines == ["id,name,age", "1,John,30", "2,Jane,25"]


def test_csv_follows_field_order_not_row_key_order():
    rows = [{"name": "John", "id": 1}]

    lines = export_to_csv(rows, ["id", "name"]).decode("utf-8").splitlines()

    assert lines[1] == "1,John"


def test_csv_empty_rows_raises():
    with pytest.raises(EmptyDatasetError) as exc_info:
        export_to_csv([], ["id", "name"])

    assert "no data" in str(exc_info.value)
    assert isinstance(exc_info.value, ExportError)


def test_csv_quotes_delimiters_quotes_and_newlines():
    rows = [{"a": "Doe, John", "b": 'say "hi"', "c": "line1\nline2"}]

    text = export_to_csv(rows, ["a", "b", "c"]).decode("utf-8")

    assert '"Doe, John"' in text
    assert '"say ""hi"""' in text
    parsed = list(csv.reader(io.StringIO(text)))
    assert parsed[1] == ["Doe, John", 'say "hi"', "line1\nline2"]


def test_csv_missing_and_null_values_are_empty():
    rows = [{"id": 1, "name": None}]

    lines = export_to_csv(rows, ["id", "name", "age"]).decode("utf-8").splitlines()

    assert lines[1] == "1,,"


def test_csv_integral_float_has_no_decimal_point():
    rows = [{"n": 42.0, "price": 9.99, "flag": True}]

    lines = export_to_csv(rows, ["n", "price", "flag"]).decode("utf-8").splitlines()

    assert lines[1] == "42,9.99,true"


# =============================================================================
# MARKDOWN
# =============================================================================

def test_markdown_table_structure(sample_rows, sample_fields):
    lines = export_to_markdown(sample_rows, sample_fields).decode("utf-8").splitlines()

    assert lines[0] == "| id | name | age |"
    assert lines[1] == "|--------|--------|--------|"
    assert lines[2] == "| 1 | John | 30 |"
    assert lines[3] == "| 2 | Jane | 25 |"
    assert len(lines) == 4


def test_markdown_empty_rows_raises():
    with pytest.raises(EmptyDatasetError):
        export_to_markdown([], ["id"])


def test_markdown_formats_values_like_csv():
    rows = [{"id": 7.0, "note": None, "ok": False}]

    lines = export_to_markdown(rows, ["id", "note", "ok"]).decode("utf-8").splitlines()

    assert lines[2] == "| 7 |  | false |"


def test_markdown_escapes_pipes_and_line_breaks():
    rows = [{"a": "x|y", "b": "line1\nline2\r\nline3"}]

    lines = export_to_markdown(rows, ["a", "b"]).decode("utf-8").splitlines()

    assert len(lines) == 3
    assert lines[2] == "| x\\|y | line1<br>line2<br>line3 |"


# =============================================================================
# SQL
# =============================================================================

def test_sql_create_table_and_insert():
    rows = [{"id": 1, "name": "John", "active": True}]

    sql = export_to_sql(rows, ["id", "name", "active"], "users").decode("utf-8")

    assert sql.startswith("-- Generated data\n-- Table: users\n")
    assert "CREATE TABLE IF NOT EXISTS users (" in sql
    assert "  id NUMERIC,\n  name TEXT,\n  active BOOLEAN\n);" in sql
    assert "INSERT INTO users (id, name, active) VALUES (1, 'John', TRUE);" in sql


def test_sql_one_insert_per_row_in_order(sample_rows, sample_fields):
    sql = export_to_sql(sample_rows, sample_fields, "people").decode("utf-8")
    inserts = [line for line in sql.splitlines() if line.startswith("INSERT INTO")]

    assert inserts == [
        "INSERT INTO people (id, name, age) VALUES (1, 'John', 30);",
        "INSERT INTO people (id, name, age) VALUES (2, 'Jane', 25);",
    ]


@pytest.mark.parametrize("table_name", ["", None])
def test_sql_default_table_name(sample_rows, sample_fields, table_name):
    sql = export_to_sql(sample_rows, sample_fields, table_name).decode("utf-8")

    assert "CREATE TABLE IF NOT EXISTS mock_data (" in sql
    assert "INSERT INTO mock_data " in sql


def test_sql_default_table_name_when_omitted(sample_rows, sample_fields):
    sql = export_to_sql(sample_rows, sample_fields).decode("utf-8")

    assert "-- Table: mock_data" in sql


def test_sql_empty_rows_raises():
    with pytest.raises(EmptyDatasetError):
        export_to_sql([], ["id"], "users")


def test_sql_doubles_single_quotes():
    sql = export_to_sql([{"word": "it's"}], ["word"]).decode("utf-8")

    assert "VALUES ('it''s');" in sql


def test_sql_null_and_missing_values():
    rows = [{"id": 1, "email": None}]

    sql = export_to_sql(rows, ["id", "email", "phone"]).decode("utf-8")

    assert "VALUES (1, NULL, NULL);" in sql


def test_sql_types_inferred_from_first_row_only():
    rows = [
        {"score": None, "count": 1},
        {"score": 12.5, "count": "many"},
    ]

    sql = export_to_sql(rows, ["score", "count"]).decode("utf-8")

    assert "  score TEXT,\n  count NUMERIC\n" in sql
    assert "VALUES (12.5, 'many');" in sql


def test_sql_integral_float_and_fraction():
    sql = export_to_sql([{"a": 42.0, "b": 0.25}], ["a", "b"]).decode("utf-8")

    assert "VALUES (42, 0.25);" in sql


def test_sql_nested_values_are_quoted_without_escaping():
    rows = [{"tags": ["a", "b's"]}]

    sql = export_to_sql(rows, ["tags"]).decode("utf-8")

    assert "  tags TEXT\n" in sql
    assert """VALUES ('["a","b's"]');""" in sql


@pytest.mark.parametrize("number", [float("nan"), float("inf"), float("-inf")])
def test_sql_non_finite_number_raises(number):
    with pytest.raises(ExportError):
        export_to_sql([{"x": 1}, {"x": number}], ["x"])


def test_sql_very_large_integer_is_kept():
    sql = export_to_sql([{"x": 10 ** 400}], ["x"]).decode("utf-8")

    assert f"VALUES ({10 ** 400});" in sql


# =============================================================================
# CELL VALUES
# =============================================================================

@pytest.mark.parametrize(
    "value, kind",
    [
        (None, CellKind.NULL),
        ("hello", CellKind.STRING),
        (3, CellKind.NUMBER),
        (2.5, CellKind.NUMBER),
        (True, CellKind.BOOLEAN),
        (False, CellKind.BOOLEAN),
        ({"k": 1}, CellKind.OTHER),
        ([1, 2], CellKind.OTHER),
    ],
)
def test_classify(value, kind):
    assert classify(value).kind is kind


@pytest.mark.parametrize(
    "number, expected",
    [
        (42, "42"),
        (42.0, "42"),
        (-3.0, "-3"),
        (3.14, "3.14"),
        (0.1, "0.1"),
        (1e21, "1000000000000000000000"),
        (1.5e-7, "1.5e-07"),
    ],
)
def test_format_number(number, expected):
    assert format_number(number) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ""),
        ("hello", "hello"),
        (30, "30"),
        (30.0, "30"),
        (1.5, "1.5"),
        (True, "true"),
        (False, "false"),
        ({"k": 1}, '{"k":1}'),
    ],
)
def test_format_text_value(value, expected):
    assert format_text_value(classify(value)) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "NULL"),
        ("John", "'John'"),
        ("it's", "'it''s'"),
        (30.0, "30"),
        (1.5, "1.5"),
        (True, "TRUE"),
        (False, "FALSE"),
    ],
)
def test_format_sql_value(value, expected):
    assert format_sql_value(classify(value)) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "TEXT"),
        ("x", "TEXT"),
        (1, "NUMERIC"),
        (1.5, "NUMERIC"),
        (True, "BOOLEAN"),
        ([1], "TEXT"),
    ],
)
def test_infer_sql_type(value, expected):
    assert infer_sql_type(classify(value)) == expected


# =============================================================================
# FORMATS
# =============================================================================

def test_available_formats_sorted_and_unique():
    formats = available_formats()

    assert formats == ["csv", "json", "markdown", "sql"]
    assert len(set(formats)) == len(formats)


def test_available_formats_unaffected_by_callers(sample_rows, sample_fields):
    first = available_formats()
    first.append("xml")
    export_to_csv(sample_rows, sample_fields)

    assert available_formats() == ["csv", "json", "markdown", "sql"]
