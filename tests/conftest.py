import json
import os
import sys
import pytest
from fastapi.testclient import TestClient

# Add the parent directory to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set environment variables for tests before any imports happen
os.environ["JOB_STORE"] = "memory"
os.environ["ADMIN_API_KEY"] = "test-admin-key"
os.environ.pop("SEED_DATA_PATH", None)

from main import create_app  # noqa: E402
from storage.base import JobStore  # noqa: E402

ADMIN_HEADERS = {"Authorization": "Bearer test-admin-key"}

SEED_DATA = {
    "companies": [
        {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        },
        {
            "handle": "c2",
            "name": "C2",
            "description": "Desc2",
            "numEmployees": 2,
            "logoUrl": "http://c2.img",
        },
    ],
    # ids 1-4 in this order
    "jobs": [
        {"title": "Engineer", "salary": 100000, "equity": 0.1, "companyHandle": "c1"},
        {"title": "Senior Engineering Lead", "salary": 99999, "equity": 0, "companyHandle": "c1"},
        {"title": "Manager", "companyHandle": "c2"},
        {"title": "Analyst", "salary": 150000, "equity": 0.02, "companyHandle": "c2"},
    ],
}


class SpyJobStore(JobStore):
    """Wraps the app's store and records every persistence call"""

    def __init__(self, store: JobStore):
        super().__init__()
        self.name = store.name
        self.store = store
        self.calls = []

    async def add_company(self, company):
        return await self.store.add_company(company)

    async def create(self, data):
        self.calls.append("create")
        return await self.store.create(data)

    async def find_all(self, filters):
        self.calls.append("find_all")
        return await self.store.find_all(filters)

    async def get(self, job_id):
        self.calls.append("get")
        return await self.store.get(job_id)

    async def update(self, job_id, patch):
        self.calls.append("update")
        return await self.store.update(job_id, patch)

    async def remove(self, job_id):
        self.calls.append("remove")
        return await self.store.remove(job_id)

    async def close(self):
        await self.store.close()


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text(json.dumps(SEED_DATA), encoding="utf-8")
    return str(path)


@pytest.fixture(params=["memory", "sqlite"])
def client(request, monkeypatch, seed_file):
    """Client for an app seeded with SEED_DATA, once per store backend"""
    monkeypatch.setenv("JOB_STORE", request.param)
    monkeypatch.setenv("DATABASE_PATH", ":memory:")
    monkeypatch.setenv("SEED_DATA_PATH", seed_file)
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def spy_store(client):
    """Swap the app's store for a spy around it"""
    spy = SpyJobStore(client.app.state.store)
    client.app.state.store = spy
    return spy
