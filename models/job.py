from pydantic import BaseModel
from typing import List, Optional


class Company(BaseModel):
    handle: str
    name: str
    description: Optional[str] = None
    numEmployees: Optional[int] = None
    logoUrl: Optional[str] = None


class Job(BaseModel):
    """Job as returned by create and update"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    companyHandle: str


class JobListItem(Job):
    """Job as returned by the list endpoint, flattened with its company name"""
    companyName: str


class JobDetail(BaseModel):
    """Job as returned by the single-record endpoint, with its company expanded"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company: Company


class JobResponse(BaseModel):
    job: Job


class JobDetailResponse(BaseModel):
    job: JobDetail


class JobListResponse(BaseModel):
    jobs: List[JobListItem]


class DeletedResponse(BaseModel):
    deleted: int
