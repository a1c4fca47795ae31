from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkerSettings(BaseSettings):
    """Configuration for the link checker worker pool and its status store."""
    WORKER_COUNT: int = Field(default=3, ge=1)
    QUEUE_CAPACITY: int = Field(default=100, ge=1)
    LINK_PAUSE_SEC: float = Field(default=0.1, ge=0)
    CHECK_TIMEOUT_SEC: float = Field(default=15.0, gt=0)
    DATA_FILE: str = "tasks_data.json"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

def get_worker_settings() -> WorkerSettings:
    """Return a fresh worker settings instance."""
    return WorkerSettings()
