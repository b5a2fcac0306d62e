"""
Schema validation for job requests.

validate() never raises for bad input: it returns Accepted with the typed
model or Rejected with the ordered list of violation messages, and leaves
it to the caller to decide how a rejection is reported.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Type, Union
from pydantic import BaseModel, ValidationError

from models.request import JobNew, JobSearch, JobUpdate

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "jobNew": JobNew,
    "jobUpdate": JobUpdate,
    "jobSearch": JobSearch,
}


@dataclass(frozen=True)
class Accepted:
    value: BaseModel
    valid = True


@dataclass(frozen=True)
class Rejected:
    errors: List[str]
    valid = False


ValidationResult = Union[Accepted, Rejected]


def format_error(error: Dict[str, Any]) -> str:
    """Render one pydantic error as 'instance.<path> <message>'"""
    path = "".join(f"[{part}]" if isinstance(part, int) else f".{part}" for part in error["loc"])
    return f"instance{path} {error['msg']}"


def validate(candidate: Any, schema_name: str) -> ValidationResult:
    """
    Validate a raw object against one of the named schemas

    Args:
        candidate: Decoded JSON body or normalized query
        schema_name: "jobNew", "jobUpdate" or "jobSearch"

    Returns:
        Accepted(model) or Rejected(messages)
    """
    schema = SCHEMAS[schema_name]
    try:
        return Accepted(schema.model_validate(candidate))
    except ValidationError as e:
        return Rejected([format_error(error) for error in e.errors()])
