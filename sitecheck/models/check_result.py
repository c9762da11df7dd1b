from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Why a URL check ended without a response."""

    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSPORT = "transport"
    INVALID_URL = "invalid_url"


class CheckError(BaseModel):
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


class CheckResult(BaseModel):
    """Outcome of one GET against ``base_url + url``.

    ``status`` stays 0 when no response was received; ``error`` then says why.
    """

    url: str
    status: int = 0
    error: Optional[CheckError] = None

    @property
    def passed(self) -> bool:
        return self.status == 200
