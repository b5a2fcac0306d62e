from abc import ABC, abstractmethod
from typing import Any, Dict, List, Union

from models.job import Company, Job, JobDetail, JobListItem
from models.request import MAX_INTEGER, JobNew, JobSearch
from utils.errors import NotFoundError

JobId = Union[int, str]

# Fields a job update may change; id and companyHandle are fixed at creation
UPDATABLE_FIELDS = ("title", "salary", "equity")


class JobStore(ABC):
    """Base class for job persistence backends"""

    def __init__(self):
        self.name = "base"

    @abstractmethod
    async def add_company(self, company: Company) -> Company:
        """Register a company jobs can reference"""
        pass

    @abstractmethod
    async def create(self, data: JobNew) -> Job:
        """
        Create a job

        Args:
            data: The validated job

        Returns:
            The stored job with its assigned id

        Raises:
            NotFoundError: if companyHandle does not name a company
        """
        pass

    @abstractmethod
    async def find_all(self, filters: JobSearch) -> List[JobListItem]:
        """
        Find jobs matching every given filter, ordered by title then id

        Args:
            filters: The validated search filters

        Returns:
            List view of the matching jobs
        """
        pass

    @abstractmethod
    async def get(self, job_id: JobId) -> JobDetail:
        """Get one job with its company expanded"""
        pass

    @abstractmethod
    async def update(self, job_id: JobId, patch: Dict[str, Any]) -> Job:
        """Apply a partial update and return the updated job"""
        pass

    @abstractmethod
    async def remove(self, job_id: JobId) -> None:
        """Delete a job"""
        pass

    async def close(self) -> None:
        """Release any resources held by the store"""
        pass

    async def seed(self, data: Dict[str, Any]) -> None:
        """
        Load startup data

        Args:
            data: {"companies": [...], "jobs": [...]} in the API's field names
        """
        for company in data.get("companies", []):
            await self.add_company(Company.model_validate(company))
        for job in data.get("jobs", []):
            await self.create(JobNew.model_validate(job))

    def parse_job_id(self, job_id: JobId) -> int:
        """
        Parse a path id

        Raises:
            NotFoundError: if the id is not an integer a store can hold, since no job can have it
        """
        if isinstance(job_id, int) and not isinstance(job_id, bool):
            pk = job_id
        else:
            try:
                pk = int(str(job_id).strip())
            except ValueError:
                raise not_found(job_id) from None

        if not 0 <= pk <= MAX_INTEGER:
            raise not_found(job_id)
        return pk


def check_patch(patch: Dict[str, Any]) -> Dict[str, Any]:
    fixed = [field for field in patch if field not in UPDATABLE_FIELDS]
    if fixed:
        raise ValueError(f"Cannot update job fields: {', '.join(fixed)}")
    return patch


def not_found(job_id: JobId) -> NotFoundError:
    return NotFoundError(f"No job: {job_id}")


def no_company(handle: str) -> NotFoundError:
    return NotFoundError(f"No company: {handle}")
