"""Search → overview → detail pipeline."""

import logging
from collections.abc import Iterable

from .config import ScraperConfig
from .exceptions import ValidationError
from .models import (
    DepartureDetail,
    StationCandidate,
    StationDetail,
    StationOverview,
)
from .orchestrator import fetch_departure_details
from .scraper import BvgDepartureScraper

logger = logging.getLogger(__name__)


def merge_disruptions(details: Iterable[DepartureDetail]) -> list[str]:
    """Union of all service notices, sorted and deduplicated."""
    return sorted({text for detail in details for text in detail.disruption_texts})


class DeparturePipeline:
    """Compose the scraper stages into a station detail lookup."""

    def __init__(
        self,
        config: ScraperConfig | None = None,
        scraper: BvgDepartureScraper | None = None,
    ):
        self.config = config or ScraperConfig()
        self.scraper = scraper or BvgDepartureScraper(self.config)

    def search_stations(self, query: str) -> list[StationCandidate]:
        return self.scraper.search_stations(query)

    def get_station_overview(self, candidate: StationCandidate) -> StationOverview:
        return self.scraper.get_station_overview(candidate)

    def available_lines(self, overview: StationOverview) -> list[str]:
        return overview.available_lines()

    def resolve_line(self, overview: StationOverview, line: str) -> str:
        """Check that a line given up front is served at the station.

        Raises:
            ValidationError: If the line is not among the available lines
        """
        available = self.available_lines(overview)
        if line not in available:
            raise ValidationError(
                f"{line} is not among the available lines {available}"
            )
        return line

    def get_station_detail(self, overview: StationOverview, line: str) -> StationDetail:
        """Fetch live details for every departure of a line.

        Raises:
            NetworkError: If a detail page cannot be fetched (fail-fast mode)
        """
        summaries = overview.departures_for_line(line)
        batch = fetch_departure_details(
            summaries,
            self.scraper.get_departure_detail,
            concurrency=self.config.concurrency,
            failure_policy=self.config.failure_policy,
            preserve_order=self.config.preserve_order,
        )
        if batch.failures:
            logger.warning(
                f"{len(batch.failures)} of {len(summaries)} departures "
                f"of line {line} could not be fetched"
            )
        return StationDetail(
            name=overview.name,
            line=line,
            departures=batch.details,
            disruptions=merge_disruptions(batch.details),
            failures=batch.failures,
        )
