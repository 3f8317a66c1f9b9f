"""Scraper configuration."""

from enum import Enum

from pydantic import BaseModel, Field

BASE_URL = "http://mobil.bvg.de/"
SEARCH_PATH = "Fahrinfo/bin/stboard.bin/eox?ld=0.1&&rt=0&start=suchen"
DEFAULT_CONCURRENCY = 2
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36"
)


class FailurePolicy(str, Enum):
    """How the detail stage reacts to a failed departure fetch."""

    FAIL_FAST = "fail_fast"
    PARTIAL = "partial"


class ScraperConfig(BaseModel):
    """Settings shared by the fetcher, the scraper and the orchestrator."""

    base_url: str = Field(BASE_URL, description="Timetable service root URL")
    search_path: str = Field(
        SEARCH_PATH, description="Search page path with its fixed parameters"
    )
    timeout: float | None = Field(
        None, description="Request timeout in seconds, None waits forever"
    )
    concurrency: int = Field(
        DEFAULT_CONCURRENCY, ge=1, description="Detail fetches allowed in flight"
    )
    failure_policy: FailurePolicy = Field(
        FailurePolicy.FAIL_FAST, description="Detail stage failure handling"
    )
    preserve_order: bool = Field(
        True, description="Restore timetable row order after concurrent fetches"
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header")

    def describe(self) -> dict[str, str]:
        """Human readable view of the settings."""
        return {
            "Base URL": self.base_url,
            "Timeout": "none" if self.timeout is None else f"{self.timeout:g} seconds",
            "Concurrency": str(self.concurrency),
            "Failure policy": self.failure_policy.value,
            "Row order": "timetable" if self.preserve_order else "completion",
        }
