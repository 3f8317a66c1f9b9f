"""Data models for BVG departure lookups."""

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

ON_TIME = "on time"
DELAYED_PREFIX = "delayed "


class StationCandidate(BaseModel):
    """A station entry offered by the search page."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Station name as shown in search results")
    overview_link: str = Field(
        ..., description="Absolute URL of the station timetable page"
    )

    def __str__(self) -> str:
        return self.name


class DepartureSummary(BaseModel):
    """A departure row parsed from the station timetable page."""

    time: str = Field(..., description="Raw station-local clock text (HH:MM)")
    line: str = Field(..., description="Line name without platform annotation")
    direction: str = Field(..., description="Final destination of the departure")
    platform: str | None = Field(None, description="Platform, when announced")
    detail_link: str = Field(..., description="Absolute URL of the detail page")

    def __str__(self) -> str:
        return f"{self.time} {self.line} → {self.direction}"


class StationOverview(BaseModel):
    """A station timetable page: station title plus its departure rows."""

    name: str = Field(..., description="Station title")
    departures: list[DepartureSummary] = Field(
        default_factory=list, description="Departures in timetable row order"
    )

    def available_lines(self) -> list[str]:
        """Get the distinct lines served, sorted."""
        return sorted({departure.line for departure in self.departures})

    def departures_for_line(self, line: str) -> list[DepartureSummary]:
        """Get the departures of one line, keeping row order."""
        return [departure for departure in self.departures if departure.line == line]


class DepartureDetail(BaseModel):
    """Authoritative departure record with live status and notices."""

    time: str = Field(..., description="Raw station-local clock text (HH:MM)")
    line: str = Field(..., description="Line name")
    direction: str = Field(..., description="Final destination of the departure")
    platform: str | None = Field(None, description="Platform, when announced")
    status: str = Field(ON_TIME, description="'on time' or 'delayed <token>'")
    disruption_texts: list[str] = Field(
        default_factory=list, description="Service notices in page order"
    )

    @classmethod
    def from_summary(
        cls,
        summary: DepartureSummary,
        status: str = ON_TIME,
        disruption_texts: list[str] | None = None,
    ) -> "DepartureDetail":
        """Build a detail record carrying over the summary fields."""
        return cls(
            time=summary.time,
            line=summary.line,
            direction=summary.direction,
            platform=summary.platform,
            status=status,
            disruption_texts=disruption_texts or [],
        )

    @property
    def is_delayed(self) -> bool:
        return self.status.startswith(DELAYED_PREFIX)


class DepartureFailure(BaseModel):
    """A departure whose detail page could not be fetched."""

    summary: DepartureSummary = Field(..., description="Departure that failed")
    error: str = Field(..., description="Error message")

    def __str__(self) -> str:
        return f"{self.summary}: {self.error}"


class StationDetail(BaseModel):
    """Final result for one station and one line."""

    name: str = Field(..., description="Station title")
    line: str = Field(..., description="Selected line")
    departures: list[DepartureDetail] = Field(
        default_factory=list, description="Departure details"
    )
    disruptions: list[str] = Field(
        default_factory=list, description="Sorted, deduplicated service notices"
    )
    failures: list[DepartureFailure] = Field(
        default_factory=list,
        description="Departures left out in partial mode",
    )

    @property
    def is_complete(self) -> bool:
        return not self.failures


class StationSearchRequest(BaseModel):
    """Request model for the station search page."""

    query: str = Field(..., description="Free-text station query")

    def to_search_url(self, base_url: str, search_path: str) -> str:
        """Convert to the search page URL."""
        return f"{base_url}{search_path}&input={quote(self.query.strip())}"
