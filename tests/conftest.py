import pytest


@pytest.fixture
def users_table() -> list[list[str]]:
    return [
        ["UserId", "Name", "Gender", "Birthday", "Age", "JoinedYear", "LeftYear"],
        ["1", "Ann", "F", "1990-05-01", "34", "2015", "2020"],
        ["2", "Bob", "M", "1985-11-23", "39", "2018", "2016"],
        ["2", "", "X", "", "abc", "2019", ""],
        ["4", "Ann", "F", "1990-05-01", "-3", "", "2021"],
    ]
