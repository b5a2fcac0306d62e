import os
from typing import Dict, Any, List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

STORE_BACKENDS = ("memory", "sqlite")


def get_config() -> Dict[str, Any]:
    """
    Load and validate configuration from environment variables.
    Called when the app starts so tests can adjust the environment first.
    """
    store = os.getenv("JOB_STORE", "memory").lower()
    if store not in STORE_BACKENDS:
        raise ValueError(f"JOB_STORE must be one of {', '.join(STORE_BACKENDS)}, got '{store}'")

    raw_port = os.getenv("PORT", "8000")
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got '{raw_port}'") from None

    return {
        "ADMIN_API_KEY": os.getenv("ADMIN_API_KEY") or None,
        "JOB_STORE": store,
        "DATABASE_PATH": os.getenv("DATABASE_PATH", "jobs.db"),
        "SEED_DATA_PATH": os.getenv("SEED_DATA_PATH") or None,
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
        "CORS_ORIGINS": _split_origins(os.getenv("CORS_ORIGINS", "*")),
        "HOST": os.getenv("HOST", "0.0.0.0"),
        "PORT": port,
    }


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
