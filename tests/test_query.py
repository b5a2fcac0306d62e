import math
import pytest

from utils.query import normalize_job_query, to_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("100000", 100000),
        (" 42 ", 42),
        ("0", 0),
        ("", 0),
        ("   ", 0),
        ("1e3", 1000),
        ("-5", -5),
        ("2.5", 2.5),
        ("0x10", 16),
        ("0X1f", 31),
        ("0b101", 5),
        ("0o7", 7),
        ("9223372036854775807", 2**63 - 1),
        ("100000000000000000000", 10**20),
    ],
)
def test_to_number(raw, expected):
    value = to_number(raw)
    assert value == expected
    assert type(value) is type(expected)


@pytest.mark.parametrize("raw", ["abc", "12abc", "1_000", "nan", "0x", "0xZZ", "-0x10"])
def test_to_number_not_numeric_is_nan(raw):
    assert math.isnan(to_number(raw))


def test_normalize_converts_min_salary():
    assert normalize_job_query({"minSalary": "5000"}) == {"minSalary": 5000}


def test_normalize_keeps_non_numeric_min_salary_for_validator():
    query = normalize_job_query({"minSalary": "lots"})
    assert "minSalary" in query
    assert math.isnan(query["minSalary"])


def test_normalize_has_equity_only_exact_true():
    assert normalize_job_query({"hasEquity": "true"}) == {"hasEquity": True}


@pytest.mark.parametrize("raw", ["false", "True", "TRUE", "1", "yes", "", " true"])
def test_normalize_has_equity_anything_else_is_false(raw):
    assert normalize_job_query({"hasEquity": raw}) == {"hasEquity": False}


def test_normalize_absent_keys_stay_absent():
    assert normalize_job_query({}) == {}


def test_normalize_passes_other_keys_through():
    query = normalize_job_query({"title": "eng", "color": "red"})
    assert query == {"title": "eng", "color": "red"}


def test_normalize_does_not_mutate_input():
    raw = {"minSalary": "10", "hasEquity": "true"}
    normalize_job_query(raw)
    assert raw == {"minSalary": "10", "hasEquity": "true"}
