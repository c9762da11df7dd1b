from typing import List

from pydantic import BaseModel

from sitecheck.models.check_result import CheckResult


class Report(BaseModel):
    """Aggregated outcome of one checker run, in input order."""

    base_url: str
    total: int
    passed: int
    failed: int
    results: List[CheckResult]
    failures: List[CheckResult]
