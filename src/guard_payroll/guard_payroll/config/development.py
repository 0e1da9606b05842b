import os

BACKEND_CONFIG = {
    "base_url": os.getenv("BACKEND_URL", "http://localhost:8000"),
    "token": os.getenv("BACKEND_TOKEN", ""),
    "timeout": float(os.getenv("BACKEND_TIMEOUT", "10")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEFAULT_OT_RATE = float(os.getenv("DEFAULT_OT_RATE", "700"))
EMPLOYEE_FETCH_LIMIT = int(os.getenv("EMPLOYEE_FETCH_LIMIT", "1000"))
PERSIST_WORKERS = int(os.getenv("PERSIST_WORKERS", "4"))
