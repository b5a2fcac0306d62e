import math
import pytest

from models.request import JobNew, JobSearch, JobUpdate
from utils.validation import Accepted, Rejected, validate


# jobNew

def test_job_new_accepts_full_job():
    result = validate({"title": "Dev", "salary": 10, "equity": 0.5, "companyHandle": "c1"}, "jobNew")
    assert isinstance(result, Accepted)
    assert result.valid
    assert isinstance(result.value, JobNew)
    assert result.value.salary == 10


def test_job_new_accepts_integer_equity():
    result = validate({"title": "Dev", "equity": 1, "companyHandle": "c1"}, "jobNew")
    assert result.valid
    assert result.value.equity == 1.0


@pytest.mark.parametrize(
    "body, field",
    [
        ({"companyHandle": "c1"}, "title"),
        ({"title": "", "companyHandle": "c1"}, "title"),
        ({"title": 5, "companyHandle": "c1"}, "title"),
        ({"title": "Dev"}, "companyHandle"),
        ({"title": "Dev", "companyHandle": "c1", "salary": "5"}, "salary"),
        ({"title": "Dev", "companyHandle": "c1", "salary": 5.5}, "salary"),
        ({"title": "Dev", "companyHandle": "c1", "salary": True}, "salary"),
        ({"title": "Dev", "companyHandle": "c1", "salary": -1}, "salary"),
        ({"title": "Dev", "companyHandle": "c1", "salary": 2**63}, "salary"),
        ({"title": "Dev", "companyHandle": "c1", "equity": 1.1}, "equity"),
        ({"title": "Dev", "companyHandle": "c1", "equity": -0.1}, "equity"),
        ({"title": "Dev", "companyHandle": "c1", "equity": "0.1"}, "equity"),
        ({"title": "Dev", "companyHandle": "c1", "equity": math.nan}, "equity"),
        ({"title": "Dev", "companyHandle": "c1", "id": 3}, "id"),
    ],
)
def test_job_new_rejects(body, field):
    result = validate(body, "jobNew")
    assert isinstance(result, Rejected)
    assert not result.valid
    assert len(result.errors) == 1
    assert result.errors[0].startswith(f"instance.{field} ")


def test_job_new_rejects_non_object():
    result = validate("not a job", "jobNew")
    assert not result.valid
    assert result.errors[0].startswith("instance ")


# jobUpdate

def test_job_update_patch_has_only_sent_fields():
    result = validate({"salary": 5}, "jobUpdate")
    assert isinstance(result.value, JobUpdate)
    assert result.value.patch() == {"salary": 5}


def test_job_update_can_clear_salary_and_equity():
    result = validate({"salary": None, "equity": None}, "jobUpdate")
    assert result.value.patch() == {"salary": None, "equity": None}


def test_job_update_rejects_empty():
    result = validate({}, "jobUpdate")
    assert result.errors == ["instance does not meet minimum property length of 1"]


@pytest.mark.parametrize("field, value", [("id", 1), ("companyHandle", "c2")])
def test_job_update_rejects_fixed_fields(field, value):
    result = validate({"title": "New", field: value}, "jobUpdate")
    assert not result.valid
    assert result.errors[0].startswith(f"instance.{field} ")


def test_job_update_rejects_null_title():
    assert not validate({"title": None}, "jobUpdate").valid


# jobSearch

def test_job_search_defaults():
    result = validate({}, "jobSearch")
    assert isinstance(result.value, JobSearch)
    assert result.value.minSalary is None
    assert result.value.hasEquity is False
    assert result.value.title is None


def test_job_search_accepts_normalized_query():
    result = validate({"minSalary": 100, "hasEquity": True, "title": "eng"}, "jobSearch")
    assert result.valid
    assert result.value.hasEquity is True


@pytest.mark.parametrize(
    "query",
    [
        {"minSalary": math.nan},
        {"minSalary": 1.5},
        {"minSalary": "100"},
        {"minSalary": -1},
        {"minSalary": 2**63},
        {"hasEquity": "true"},
        {"title": ""},
        {"name": "x"},
    ],
)
def test_job_search_rejects(query):
    assert not validate(query, "jobSearch").valid


def test_errors_keep_rule_order():
    result = validate({"minSalary": "x", "hasEquity": "x", "title": 3}, "jobSearch")
    assert [e.split(" ")[0] for e in result.errors] == [
        "instance.minSalary",
        "instance.hasEquity",
        "instance.title",
    ]


def test_unknown_schema_name():
    with pytest.raises(KeyError):
        validate({}, "companyNew")


def test_largest_integer_is_accepted():
    largest = 2**63 - 1
    assert validate({"title": "Dev", "salary": largest, "companyHandle": "c1"}, "jobNew").valid
    assert validate({"salary": largest}, "jobUpdate").valid
    assert validate({"minSalary": largest}, "jobSearch").valid


def test_job_update_rejects_salary_too_large():
    result = validate({"salary": 2**63}, "jobUpdate")
    assert result.errors[0].startswith("instance.salary ")


def test_all_schemas_are_strict_and_closed():
    for schema in (JobNew, JobUpdate, JobSearch):
        assert schema.model_config["strict"] is True
        assert schema.model_config["extra"] == "forbid"
