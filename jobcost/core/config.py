from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "JobCost Pro"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Local storage
    DATA_DIR: Path = Path.home() / ".jobcost"
    DATABASE_FILE: str = "jobcostpro.db"
    DATABASE_URL: str | None = None  # Full SQLAlchemy URL, overrides DATA_DIR
    SQLITE_WAL: bool = True
    SEED_ON_STARTUP: bool = True
    REPORTS_DIR: Path | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite:///{self.DATA_DIR / self.DATABASE_FILE}"

    @model_validator(mode="after")
    def _set_default_reports_dir(self) -> Self:
        if self.REPORTS_DIR is None:
            self.REPORTS_DIR = self.DATA_DIR / "reports"
        return self

    # Report rendering. The bundled PDF fonts have no rupee glyph.
    CURRENCY_SYMBOL: str = "Rs. "
    REPORT_PAGE_SIZE: Literal["A4", "LETTER"] = "A4"
    DASHBOARD_RECENT_JOBS: int = 10

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "json" or "console"
    LOG_SQL: bool = False


settings = Settings()  # type: ignore
