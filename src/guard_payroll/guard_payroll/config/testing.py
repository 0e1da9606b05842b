BACKEND_CONFIG = {
    "base_url": "http://backend.test",
    "token": "test-token",
    "timeout": 5.0,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

DEFAULT_OT_RATE = 700.0
EMPLOYEE_FETCH_LIMIT = 1000
PERSIST_WORKERS = 2
