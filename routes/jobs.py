import json
import logging
from typing import Any
from fastapi import APIRouter, Depends, Request

from models.job import DeletedResponse, JobDetailResponse, JobListResponse, JobResponse
from storage.base import JobStore
from utils.auth import ensure_admin
from utils.errors import BadRequestError
from utils.query import normalize_job_query
from utils.validation import validate

router = APIRouter(prefix="/jobs", tags=["jobs"])


def get_store(request: Request) -> JobStore:
    return request.app.state.store


async def read_json(request: Request) -> Any:
    """Decode the request body, reporting malformed JSON as a bad request"""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequestError("Request body must be valid JSON") from None


def validated(candidate: Any, schema_name: str):
    """Return the typed value or raise a bad request carrying every violation"""
    result = validate(candidate, schema_name)
    if not result.valid:
        logging.info(f"Rejected {schema_name} input: {result.errors}")
        raise BadRequestError(result.errors)
    return result.value


@router.post("", status_code=201, response_model=JobResponse, dependencies=[Depends(ensure_admin)])
async def create_job(request: Request, store: JobStore = Depends(get_store)):
    """
    Create a job

    Body: { title, salary, equity, companyHandle }
    Returns { job: { id, title, salary, equity, companyHandle } }

    Authorization required: admin
    """
    data = validated(await read_json(request), "jobNew")
    job = await store.create(data)
    logging.info(f"Created job {job.id} for {job.companyHandle}")
    return {"job": job}


@router.get("", response_model=JobListResponse)
async def list_jobs(request: Request, store: JobStore = Depends(get_store)):
    """
    List jobs, optionally filtered

    Query filters (all optional, combined with AND):
    - minSalary: salary at least this much
    - hasEquity: "true" lists only jobs with equity > 0; any other value is ignored
    - title: case-insensitive partial match

    Authorization required: none
    """
    query = normalize_job_query(request.query_params)
    filters = validated(query, "jobSearch")
    jobs = await store.find_all(filters)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(job_id: str, store: JobStore = Depends(get_store)):
    """
    Get a job with its company { handle, name, description, numEmployees, logoUrl }

    Authorization required: none
    """
    job = await store.get(job_id)
    return {"job": job}


@router.patch("/{job_id}", response_model=JobResponse, dependencies=[Depends(ensure_admin)])
async def update_job(job_id: str, request: Request, store: JobStore = Depends(get_store)):
    """
    Update a job

    Body may include { title, salary, equity }; id and companyHandle cannot change.

    Authorization required: admin
    """
    update = validated(await read_json(request), "jobUpdate")
    job = await store.update(job_id, update.patch())
    logging.info(f"Updated job {job.id}: {sorted(update.patch())}")
    return {"job": job}


@router.delete("/{job_id}", response_model=DeletedResponse, dependencies=[Depends(ensure_admin)])
async def delete_job(job_id: str, store: JobStore = Depends(get_store)):
    """
    Delete a job

    Authorization required: admin
    """
    await store.remove(job_id)
    deleted = store.parse_job_id(job_id)
    logging.info(f"Deleted job {deleted}")
    return {"deleted": deleted}
