from typing import Any, Dict, List
import itertools

from storage.base import JobId, JobStore, check_patch, no_company, not_found
from models.job import Company, Job, JobDetail, JobListItem
from models.request import JobNew, JobSearch


def matches_filters(job: Job, filters: JobSearch) -> bool:
    """
    Check a job against the search filters (all must hold)

    Args:
        job: The stored job
        filters: The validated filters

    Returns:
        True if the job should be listed
    """
    if filters.minSalary is not None:
        if job.salary is None or job.salary < filters.minSalary:
            return False

    # hasEquity=False puts no constraint on equity
    if filters.hasEquity:
        if job.equity is None or job.equity <= 0:
            return False

    if filters.title is not None:
        if filters.title.lower() not in job.title.lower():
            return False

    return True


class MemoryJobStore(JobStore):
    """Job store kept in process memory, for development and tests"""

    def __init__(self):
        super().__init__()
        self.name = "memory"
        self.companies: Dict[str, Company] = {}
        self.jobs: Dict[int, Job] = {}
        self._ids = itertools.count(1)

    async def add_company(self, company: Company) -> Company:
        self.companies[company.handle] = company
        return company

    async def create(self, data: JobNew) -> Job:
        if data.companyHandle not in self.companies:
            raise no_company(data.companyHandle)

        job = Job(id=next(self._ids), **data.model_dump())
        self.jobs[job.id] = job
        return job

    async def find_all(self, filters: JobSearch) -> List[JobListItem]:
        found = [job for job in self.jobs.values() if matches_filters(job, filters)]
        found.sort(key=lambda job: (job.title, job.id))
        return [
            JobListItem(**job.model_dump(), companyName=self.companies[job.companyHandle].name)
            for job in found
        ]

    async def get(self, job_id: JobId) -> JobDetail:
        job = self._lookup(job_id)
        fields = job.model_dump(exclude={"companyHandle"})
        return JobDetail(**fields, company=self.companies[job.companyHandle])

    async def update(self, job_id: JobId, patch: Dict[str, Any]) -> Job:
        job = self._lookup(job_id)
        updated = job.model_copy(update=check_patch(patch))
        self.jobs[updated.id] = updated
        return updated

    async def remove(self, job_id: JobId) -> None:
        job = self._lookup(job_id)
        del self.jobs[job.id]

    def _lookup(self, job_id: JobId) -> Job:
        job = self.jobs.get(self.parse_job_id(job_id))
        if job is None:
            raise not_found(job_id)
        return job
