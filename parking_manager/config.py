import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./parking.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

API_USERNAME = os.getenv("API_USERNAME", "admin")
API_PASSWORD = os.getenv("API_PASSWORD", "admin")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
ROOT_PATH = os.getenv("ROOT_PATH", "")

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 10

# largest value a signed 64-bit INTEGER column or LIMIT/OFFSET can bind
SQL_INTEGER_MAX = 2**63 - 1
