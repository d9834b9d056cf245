from typing import Optional

import pytest

from tablecheck import ConfigurationException, TableValidator


def column(name: str, *cells: Optional[str]) -> TableValidator:
    return TableValidator([[name], *[[cell] for cell in cells]])


def report(validator: TableValidator) -> list[tuple[int, str]]:
    return [(d.row_number, d.message) for d in validator.validate().diagnostics]


def test_required_reports_every_blank_row() -> None:
    validator = column("Name", "", "   ", None, "\t")
    validator.field("Name").is_required()
    assert report(validator) == [
        (2, "Name cannot be empty"),
        (3, "Name cannot be empty"),
        (4, "Name cannot be empty"),
        (5, "Name cannot be empty"),
    ]


def test_unique_reports_only_later_duplicates() -> None:
    validator = column("Code", "a", "b", "a")
    validator.field("Code").is_unique()
    assert report(validator) == [(4, "Code should be unique, found duplicate: a")]


def test_unique_treats_blank_cells_as_values_unless_ignored() -> None:
    validator = column("Code", "", "x", "")
    validator.field("Code").is_unique()
    assert report(validator) == [(4, "Code should be unique, found duplicate: ")]

    lenient = column("Code", "", "x", "")
    lenient.field("Code").is_unique(ignore_blank=True)
    assert report(lenient) == []


def test_unique_compares_raw_values() -> None:
    validator = column("Code", "a", "a ", "A")
    validator.field("Code").is_unique()
    assert report(validator) == []


def test_integer_allows_blank() -> None:
    validator = column("Count", "3", "x", "")
    validator.field("Count").is_integer()
    assert report(validator) == [(3, "Count should be an integer, got: x")]


@pytest.mark.parametrize("cell", ["1.5", "1_000", "1e3", "9223372036854775808", "12a"])
def test_integer_rejects_non_integers(cell: str) -> None:
    validator = column("Count", cell)
    validator.field("Count").is_integer()
    assert report(validator) == [(2, f"Count should be an integer, got: {cell}")]


def test_numeric_accepts_decimal_and_exponent_forms() -> None:
    validator = column("Price", "12", "-0.5", ".25", "1e3", " 7 ", "", "1,5", "nan")
    validator.field("Price").is_numeric()
    assert report(validator) == [
        (8, "Price should be a number, got: 1,5"),
        (9, "Price should be a number, got: nan"),
    ]


def test_greater_than_value_skips_unparseable_cells() -> None:
    validator = column("Amount", "15", "5", "abc", "", "10")
    validator.field("Amount").is_greater_than(10)
    assert report(validator) == [
        (3, "Amount should be greater than 10, got: 5"),
        (6, "Amount should be greater than 10, got: 10"),
    ]


def test_less_than_value() -> None:
    validator = column("Age", "149.5", "150", "200", "old")
    validator.field("Age").is_less_than(150)
    assert report(validator) == [
        (3, "Age should be less than 150, got: 150"),
        (4, "Age should be less than 150, got: 200"),
    ]


def test_numeric_bound_must_be_a_number() -> None:
    validator = column("Age", "1")
    with pytest.raises(ConfigurationException):
        validator.field("Age").is_greater_than(True)
    with pytest.raises(ConfigurationException):
        validator.field("Age").is_less_than(None)


def test_is_in_is_case_sensitive_and_lists_allowed_values() -> None:
    validator = column("Gender", "M", "f", "", "X")
    validator.field("Gender").is_in("M", "F")
    assert report(validator) == [
        (3, "Gender should be one of: {M, F}, got: f"),
        (5, "Gender should be one of: {M, F}, got: X"),
    ]


def test_is_in_needs_allowed_values() -> None:
    validator = column("Gender", "M")
    with pytest.raises(ConfigurationException):
        validator.field("Gender").is_in()


def test_cross_field_comparisons() -> None:
    validator = TableValidator([
        ["Start", "End"],
        ["10", "5"],
        ["10", "20"],
        ["", "1"],
        ["10", "n/a"],
        ["10", "10"],
    ])
    validator.field("Start").is_less_than("End")
    validator.field("End").is_greater_than("Start")

    assert report(validator) == [
        (2, "Start should be less than End, got: 10, 5"),
        (2, "End should be greater than Start, got: 5, 10"),
        (6, "Start should be less than End, got: 10, 10"),
        (6, "End should be greater than Start, got: 10, 10"),
    ]


def test_custom_constraint_and_comparator() -> None:
    validator = TableValidator([["Email", "Backup"], ["a@x.org", "a@x.org"], ["nope", "b@x.org"]])
    validator.field("Email").add_constraint(
        lambda cell: None if "@" in (cell or "") else f"Email is not an address: {cell}",
        rule_name="email",
    )
    validator.field("Backup").add_comparator(
        "Email",
        lambda backup, email: "Backup must differ from Email" if backup == email else None,
    )

    result = validator.validate()
    assert [(d.row_number, d.message, d.rule_name) for d in result.diagnostics] == [
        (2, "Backup must differ from Email", "custom_comparison"),
        (3, "Email is not an address: nope", "email"),
    ]


def test_builders_chain_and_keep_append_order() -> None:
    validator = column("Age", "x", "")
    field = validator.field("Age")
    assert field.is_required().is_integer().is_unique() is field
    assert [c.rule_name for c in field.constraints] == ["required", "integer", "unique"]
    assert report(validator) == [
        (2, "Age should be an integer, got: x"),
        (3, "Age cannot be empty"),
    ]
