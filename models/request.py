from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_core import PydanticCustomError
from typing import Any, Optional

# Request bodies and query filters are validated strictly: "5" is not an
# integer and unknown properties are rejected.
STRICT_SCHEMA = ConfigDict(extra="forbid", strict=True)

# Largest integer a job store has to hold (SQLite INTEGER is 64-bit signed)
MAX_INTEGER = 2**63 - 1


class JobNew(BaseModel):
    model_config = ConfigDict(
        **STRICT_SCHEMA,
        json_schema_extra={
            "example": {
                "title": "Backend Engineer",
                "salary": 120000,
                "equity": 0.05,
                "companyHandle": "acme",
            }
        },
    )

    title: str = Field(..., min_length=1, description="Job title")
    salary: Optional[int] = Field(None, ge=0, le=MAX_INTEGER, description="Yearly salary")
    equity: Optional[float] = Field(None, ge=0, le=1, allow_inf_nan=False, description="Equity share between 0 and 1")
    companyHandle: str = Field(..., min_length=1, description="Handle of an existing company")


class JobUpdate(BaseModel):
    """
    Partial update of a job.

    ``id`` and ``companyHandle`` cannot be changed and are rejected as extra
    properties. ``salary`` and ``equity`` may be set to null to clear them.
    """
    model_config = STRICT_SCHEMA

    # title has no None in its type: an explicit null is rejected
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_INTEGER)
    equity: Optional[float] = Field(None, ge=0, le=1, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def require_one_property(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data:
            raise PydanticCustomError("min_properties", "does not meet minimum property length of 1")
        return data

    def patch(self) -> dict:
        """Only the fields the client actually sent"""
        return self.model_dump(exclude_unset=True)


class JobSearch(BaseModel):
    """
    Filters for the job list.

    A missing filter means no constraint on that field. hasEquity=False is the
    same as leaving it out; it does not ask for jobs without equity.
    """
    model_config = STRICT_SCHEMA

    minSalary: Optional[int] = Field(None, ge=0, le=MAX_INTEGER)
    hasEquity: bool = False
    title: Optional[str] = Field(None, min_length=1)
