from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "JobTolk"
    # Quiet window before a burst of live-search input is dispatched.
    search_debounce_ms: int = 150
    # Upper bound on entities pulled by the coarse filter before ranking.
    coarse_fetch_limit: int = 100
    log_level: str = "INFO"
    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def db_path(self) -> Path:
        return self.data_dir / "jobtolk.sqlite"

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000

    model_config = {"env_prefix": "JOBTOLK_"}


settings = Settings()
