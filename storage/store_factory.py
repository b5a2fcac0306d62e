import json
import logging
from typing import Any, Dict, Optional

from storage.base import JobStore
from storage.memory_store import MemoryJobStore
from storage.sqlite_store import SqliteJobStore


class StoreFactory:
    """Factory class for creating the job store"""

    @staticmethod
    def create_store(config: Dict[str, Any]) -> JobStore:
        """
        Create the store selected by JOB_STORE

        Args:
            config: Loaded configuration (see config.get_config)

        Returns:
            A ready job store
        """
        if config["JOB_STORE"] == "sqlite":
            logging.info(f"Using SQLite job store at {config['DATABASE_PATH']}")
            return SqliteJobStore(config["DATABASE_PATH"])

        logging.info("Using in-memory job store")
        return MemoryJobStore()

    @staticmethod
    async def seed_store(store: JobStore, seed_path: Optional[str]) -> None:
        """
        Load companies and jobs from a JSON file into the store

        Args:
            store: The store to fill
            seed_path: Path of the JSON file, or None to skip seeding
        """
        if not seed_path:
            return

        with open(seed_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        await store.seed(data)
        logging.info(
            f"Seeded {len(data.get('companies', []))} companies and "
            f"{len(data.get('jobs', []))} jobs from {seed_path}"
        )
