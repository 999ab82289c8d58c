import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _flag(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """
    Runtime configuration read from the environment (or a `.env` file).

    With neither BACKEND_URL/BACKEND_API_KEY nor DATABASE_URL set the app runs
    in mock mode: every store lives in memory and is reset on restart.
    """

    def __init__(self, **overrides):
        env = {
            "ENV": os.getenv("ENV", "dev"),
            "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO"),
            "BACKEND_URL": os.getenv("BACKEND_URL", ""),
            "BACKEND_API_KEY": os.getenv("BACKEND_API_KEY", ""),
            "BACKEND_TIMEOUT_SECONDS": float(os.getenv("BACKEND_TIMEOUT_SECONDS", "10")),
            "DATABASE_URL": os.getenv("DATABASE_URL", ""),
            "MOCK_LATENCY_MS": int(os.getenv("MOCK_LATENCY_MS", "500")),
            "SESSION_TTL_HOURS": float(os.getenv("SESSION_TTL_HOURS", "24")),
            "SESSION_STORE_PATH": os.getenv("SESSION_STORE_PATH", ".portfolio_session.json"),
            "SEED_MOCK_DATA": _flag(os.getenv("SEED_MOCK_DATA"), True),
            "BCRYPT_ROUNDS": int(os.getenv("BCRYPT_ROUNDS", "12")),
        }
        env.update(overrides)

        self.env: str = env["ENV"]
        self.log_level: str = env["LOG_LEVEL"]
        self.backend_url: str = (env["BACKEND_URL"] or "").rstrip("/")
        self.backend_api_key: str = env["BACKEND_API_KEY"] or ""
        self.backend_timeout: float = env["BACKEND_TIMEOUT_SECONDS"]
        self.database_url: str = env["DATABASE_URL"] or ""
        self.mock_latency_ms: int = env["MOCK_LATENCY_MS"]
        self.session_ttl_hours: float = env["SESSION_TTL_HOURS"]
        self.session_store_path: str = env["SESSION_STORE_PATH"]
        self.seed_mock_data: bool = env["SEED_MOCK_DATA"]
        self.bcrypt_rounds: int = env["BCRYPT_ROUNDS"]

    @property
    def rest_backend_configured(self) -> bool:
        return bool(self.backend_url and self.backend_api_key)

    @property
    def sql_backend_configured(self) -> bool:
        return bool(self.database_url)

    @property
    def backend_mode(self) -> str:
        if self.rest_backend_configured:
            return "rest"
        if self.sql_backend_configured:
            return "sql"
        return "mock"

    @property
    def persistence_configured(self) -> bool:
        return self.backend_mode != "mock"

    @property
    def latency_seconds(self) -> float:
        # Real backends bring their own latency.
        if self.backend_mode == "rest":
            return 0.0
        return max(self.mock_latency_ms, 0) / 1000.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
