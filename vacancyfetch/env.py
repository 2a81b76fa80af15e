import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://rekrutmenbersama2024.fhcibumn.id"
DEFAULT_MAX_WORKERS = 16

TOKEN_FIELD = "csrf_fhci"
TOKEN_COOKIE = "csrf_cookie_fhci"


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass
class Settings:
    base_url: str = DEFAULT_BASE_URL
    listing_path: Path = Path("data/all_jobs.csv")
    details_path: Path = Path("data/details.csv")
    id_column: str = "vacancy_id"
    company: str = "all"
    # None means one worker per identifier
    max_workers: Optional[int] = DEFAULT_MAX_WORKERS
    timeout: Optional[float] = None

    @property
    def job_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/job"

    @property
    def load_record_url(self) -> str:
        return f"{self.job_url}/loadRecord"

    @property
    def detail_url(self) -> str:
        return f"{self.job_url}/get_detail_vac"


def _parse_workers(raw: str) -> Optional[int]:
    workers = int(raw)
    if workers < 0:
        raise ValueError(f"VACANCYFETCH_MAX_WORKERS must be >= 0, got {workers}")
    return workers or None


def get_settings() -> Settings:
    """Build Settings from VACANCYFETCH_* environment variables.

    Raises ValueError when a numeric variable cannot be parsed.
    """
    settings = Settings()
    settings.base_url = os.getenv("VACANCYFETCH_BASE_URL", settings.base_url)
    if os.getenv("VACANCYFETCH_LISTING_PATH"):
        settings.listing_path = Path(os.environ["VACANCYFETCH_LISTING_PATH"])
    if os.getenv("VACANCYFETCH_DETAILS_PATH"):
        settings.details_path = Path(os.environ["VACANCYFETCH_DETAILS_PATH"])
    settings.id_column = os.getenv("VACANCYFETCH_ID_COLUMN", settings.id_column)
    settings.company = os.getenv("VACANCYFETCH_COMPANY", settings.company)
    if os.getenv("VACANCYFETCH_MAX_WORKERS"):
        settings.max_workers = _parse_workers(os.environ["VACANCYFETCH_MAX_WORKERS"])
    if os.getenv("VACANCYFETCH_TIMEOUT"):
        settings.timeout = float(os.environ["VACANCYFETCH_TIMEOUT"])
    return settings
