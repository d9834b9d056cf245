from datetime import date
from typing import Optional

import pytest
from pydantic import BaseModel, Field, ValidationError

from tablecheck import MalformedInputException, TableValidator
from tablecheck.io import generate, tabulate


class User(BaseModel):
    UserId: Optional[int] = None
    Name: Optional[str] = None
    Gender: Optional[str] = None
    Birthday: Optional[date] = None


class Contact(BaseModel):
    email: Optional[str] = Field(default=None, alias="Email")
    phone: Optional[str] = None


TABLE = [
    ["Name", "UserId", "Birthday", "Gender", "Extra"],
    ["Ann", "1", "1990-05-01", "F", "x"],
    ["Bob", "", "", "M", "y"],
]


def test_generate_matches_header_names() -> None:
    users = generate(TABLE, User)
    assert users == [
        User(UserId=1, Name="Ann", Gender="F", Birthday=date(1990, 5, 1)),
        User(UserId=None, Name="Bob", Gender="M", Birthday=None),
    ]


def test_generate_uses_aliases_and_fills_missing_columns() -> None:
    contacts = generate([["Email"], ["a@x.org"]], Contact)
    assert contacts[0].email == "a@x.org"
    assert contacts[0].phone is None


def test_generate_empty_and_header_only_tables() -> None:
    assert generate([], User) == []
    assert generate([["Name"]], User) == []


def test_generate_reports_conversion_errors() -> None:
    with pytest.raises(ValidationError):
        generate([["UserId"], ["abc"]], User)


def test_generate_rejects_short_rows() -> None:
    with pytest.raises(MalformedInputException) as excinfo:
        generate([["Name", "UserId"], ["Ann"]], User)
    assert excinfo.value.row_number == 2


def test_tabulate_uses_model_field_order() -> None:
    table = tabulate(generate(TABLE, User))
    assert table == [
        ["UserId", "Name", "Gender", "Birthday"],
        ["1", "Ann", "F", "1990-05-01"],
        ["", "Bob", "M", ""],
    ]
    assert tabulate([]) == []


def test_tabulated_records_can_be_validated() -> None:
    users = [User(UserId=1, Name="Ann"), User(UserId=1, Name="")]
    validator = TableValidator(tabulate(users))
    validator.field("UserId").is_unique()
    validator.field("Name").is_required()
    assert [(d.row_number, d.message) for d in validator.validate().diagnostics] == [
        (3, "UserId should be unique, found duplicate: 1"),
        (3, "Name cannot be empty"),
    ]
