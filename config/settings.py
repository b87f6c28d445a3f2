import os
from dotenv import load_dotenv

# Load environment variables from the project root
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))


def _bool_env(name: str, default: str = "0") -> bool:
    value = os.getenv(name, default).strip().lower()
    return value not in {"0", "false", "no", ""}


def _optional_float_env(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return float(value)


DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    pg_host = os.getenv("PGHOST")
    pg_port = os.getenv("PGPORT", "5432")
    pg_db = os.getenv("PGDATABASE")
    pg_user = os.getenv("PGUSER")
    pg_password = os.getenv("PGPASSWORD")

    if all([pg_host, pg_db, pg_user, pg_password]):
        DATABASE_URL = (
            f"postgresql+asyncpg://{pg_user}:{pg_password}@{pg_host}:{pg_port}/{pg_db}"
        )

if DATABASE_URL is None:
    raise ValueError(
        "DATABASE_URL is not configured. Set DATABASE_URL explicitly or provide "
        "PGHOST/PGPORT/PGDATABASE/PGUSER/PGPASSWORD environment variables."
    )

DATABASE_ECHO = _bool_env("DATABASE_ECHO", "false")

# Upstream JSON API
UPSTREAM_BASE_URL = os.getenv("UPSTREAM_BASE_URL", "https://jsonplaceholder.typicode.com")
UPSTREAM_TIMEOUT_SECONDS = _optional_float_env("UPSTREAM_TIMEOUT_SECONDS")

# Azure Service Bus
SERVICE_BUS_CONNECTION_STRING = os.getenv("SERVICE_BUS_CONNECTION_STRING")
SERVICE_BUS_NAMESPACE = os.getenv("SERVICE_BUS_NAMESPACE")
SERVICE_BUS_USE_MANAGED_IDENTITY = _bool_env("SERVICE_BUS_USE_MANAGED_IDENTITY", "false")
SERVICE_BUS_QUEUE_NAME = os.getenv("SERVICE_BUS_QUEUE_NAME", "myqueue")
SERVICE_BUS_TOPIC_NAME = os.getenv("SERVICE_BUS_TOPIC_NAME", "mytopic")
SERVICE_BUS_MAX_MESSAGES = int(os.getenv("SERVICE_BUS_MAX_MESSAGES", "10"))
SERVICE_BUS_MAX_WAIT_SECONDS = float(os.getenv("SERVICE_BUS_MAX_WAIT_SECONDS", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", "8000"))
