import asyncio
import logging
import sqlite3
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from storage.base import JobId, JobStore, check_patch, no_company, not_found
from models.job import Company, Job, JobDetail, JobListItem
from models.request import JobNew, JobSearch

logger = logging.getLogger(__name__)

T = TypeVar("T")

# API field name -> jobs column
JOB_COLUMNS = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
    "companyHandle": "company_handle",
}


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


def build_where(filters: JobSearch) -> Tuple[str, List[Any]]:
    """
    Compile search filters into a WHERE clause

    Args:
        filters: The validated filters

    Returns:
        (clause, params); clause is "" when nothing is filtered
    """
    conditions = []
    params: List[Any] = []

    # NULL salaries never satisfy >=
    if filters.minSalary is not None:
        conditions.append("j.salary >= ?")
        params.append(filters.minSalary)

    if filters.hasEquity:
        conditions.append("j.equity > 0")

    if filters.title is not None:
        conditions.append("instr(unicode_lower(j.title), ?) > 0")
        params.append(filters.title.lower())

    if not conditions:
        return "", params
    return "WHERE " + " AND ".join(conditions), params


class SqliteJobStore(JobStore):
    """
    SQLite job store.
    Keeps one connection; blocking calls run in a worker thread, one at a time.
    """

    def __init__(self, db_path: str = "jobs.db") -> None:
        super().__init__()
        self.name = "sqlite"
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.create_function("unicode_lower", 1, _unicode_lower, deterministic=True)
        self._lock = asyncio.Lock()
        self.init_db()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Database connection is closed")
        return self._conn

    def init_db(self) -> None:
        """Create the companies and jobs tables if they don't exist."""
        conn = self.connection
        conn.execute("PRAGMA foreign_keys = ON")
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS companies (
                handle TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                num_employees INTEGER,
                logo_url TEXT
            );
            CREATE TABLE IF NOT EXISTS jobs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                salary INTEGER CHECK (salary >= 0),
                equity REAL CHECK (equity >= 0 AND equity <= 1),
                company_handle TEXT NOT NULL
                    REFERENCES companies (handle) ON DELETE CASCADE
            );
        """)
        conn.commit()
        logger.info(f"Database initialized at {self.db_path}")

    async def _run(self, fn: Callable[[sqlite3.Connection], T]) -> T:
        async with self._lock:
            return await asyncio.to_thread(fn, self.connection)

    async def add_company(self, company: Company) -> Company:
        def insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                """
                INSERT OR REPLACE INTO companies (handle, name, description, num_employees, logo_url)
                VALUES (?, ?, ?, ?, ?)
                """,
                (company.handle, company.name, company.description, company.numEmployees, company.logoUrl),
            )
            conn.commit()

        await self._run(insert)
        return company

    async def create(self, data: JobNew) -> Job:
        def insert(conn: sqlite3.Connection) -> Job:
            company = conn.execute(
                "SELECT handle FROM companies WHERE handle = ?", (data.companyHandle,)
            ).fetchone()
            if company is None:
                raise no_company(data.companyHandle)

            cursor = conn.execute(
                "INSERT INTO jobs (title, salary, equity, company_handle) VALUES (?, ?, ?, ?)",
                (data.title, data.salary, data.equity, data.companyHandle),
            )
            conn.commit()
            return Job(id=cursor.lastrowid, **data.model_dump())

        return await self._run(insert)

    async def find_all(self, filters: JobSearch) -> List[JobListItem]:
        where, params = build_where(filters)

        def select(conn: sqlite3.Connection) -> List[JobListItem]:
            rows = conn.execute(
                f"""
                SELECT j.id, j.title, j.salary, j.equity, j.company_handle, c.name AS company_name
                FROM jobs AS j
                JOIN companies AS c ON c.handle = j.company_handle
                {where}
                ORDER BY j.title, j.id
                """,
                params,
            ).fetchall()
            return [
                JobListItem(**_job_fields(row), companyName=row["company_name"])
                for row in rows
            ]

        return await self._run(select)

    async def get(self, job_id: JobId) -> JobDetail:
        pk = self.parse_job_id(job_id)

        def select(conn: sqlite3.Connection) -> JobDetail:
            row = conn.execute(
                """
                SELECT j.id, j.title, j.salary, j.equity,
                       c.handle, c.name, c.description, c.num_employees, c.logo_url
                FROM jobs AS j
                JOIN companies AS c ON c.handle = j.company_handle
                WHERE j.id = ?
                """,
                (pk,),
            ).fetchone()
            if row is None:
                raise not_found(job_id)

            company = Company(
                handle=row["handle"],
                name=row["name"],
                description=row["description"],
                numEmployees=row["num_employees"],
                logoUrl=row["logo_url"],
            )
            return JobDetail(
                id=row["id"], title=row["title"], salary=row["salary"], equity=row["equity"], company=company
            )

        return await self._run(select)

    async def update(self, job_id: JobId, patch: Dict[str, Any]) -> Job:
        pk = self.parse_job_id(job_id)
        check_patch(patch)

        def apply(conn: sqlite3.Connection) -> Job:
            if patch:
                assignments = ", ".join(f"{JOB_COLUMNS[field]} = ?" for field in patch)
                cursor = conn.execute(
                    f"UPDATE jobs SET {assignments} WHERE id = ?",
                    [*patch.values(), pk],
                )
                conn.commit()
                if cursor.rowcount == 0:
                    raise not_found(job_id)

            row = conn.execute(
                "SELECT id, title, salary, equity, company_handle FROM jobs WHERE id = ?", (pk,)
            ).fetchone()
            if row is None:
                raise not_found(job_id)
            return Job(**_job_fields(row))

        return await self._run(apply)

    async def remove(self, job_id: JobId) -> None:
        pk = self.parse_job_id(job_id)

        def delete(conn: sqlite3.Connection) -> None:
            cursor = conn.execute("DELETE FROM jobs WHERE id = ?", (pk,))
            conn.commit()
            if cursor.rowcount == 0:
                raise not_found(job_id)

        await self._run(delete)

    async def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None


def _job_fields(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "title": row["title"],
        "salary": row["salary"],
        "equity": row["equity"],
        "companyHandle": row["company_handle"],
    }
