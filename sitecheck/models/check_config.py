from pathlib import Path
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "http://localhost:1313"
DEFAULT_CONTENT_DIR = "content"
DEFAULT_WORKERS = 100
DEFAULT_TIMEOUT = 5 * 60.0  # seconds


class CheckConfig(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    content_dir: Path = Path(DEFAULT_CONTENT_DIR)
    workers: int = Field(
        default=DEFAULT_WORKERS,
        ge=1,
        description="Maximum number of requests in flight at once.",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Per-request deadline in seconds.",
    )

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"Scheme '{parsed.scheme}' is not supported. Use http or https.")
        if not parsed.netloc:
            raise ValueError("Base URL must have a host.")
        # Collected paths carry their own leading slash
        return value.rstrip("/")
