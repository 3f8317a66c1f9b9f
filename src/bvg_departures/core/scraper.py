"""BVG mobile timetable scraper.

Three page types are read, one after the other:

* the search page, listing station candidates for a free-text query,
* a station overview page, listing the next departures in table rows,
* one detail page per departure, carrying live delay and service notices.
"""

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from ..utils.text import sanitize, sanitize_node, split_line_platform
from .config import ScraperConfig
from .exceptions import ExtractionError, ValidationError
from .fetcher import DocumentFetcher
from .models import (
    DELAYED_PREFIX,
    ON_TIME,
    DepartureDetail,
    DepartureSummary,
    StationCandidate,
    StationOverview,
    StationSearchRequest,
)
from .selectors import DETAIL_PAGE, OVERVIEW_PAGE, SEARCH_PAGE

logger = logging.getLogger(__name__)

NO_DELAY = "±0'"
TIME_PREFIX_LENGTH = 5
DELAY_TERMINATOR = "\\"


class BvgDepartureScraper:
    """Scraper for BVG station search, timetable and departure pages."""

    def __init__(
        self,
        config: ScraperConfig | None = None,
        fetcher: DocumentFetcher | None = None,
    ):
        """Initialize the scraper.

        Args:
            config: Scraper settings, defaults are used when omitted
            fetcher: Document fetcher, built from the config when omitted
        """
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or DocumentFetcher(
            timeout=self.config.timeout, user_agent=self.config.user_agent
        )

    def search_stations(self, query: str) -> list[StationCandidate]:
        """Search stations matching a free-text query.

        Args:
            query: Station name or part of it

        Returns:
            Station candidates in page order, empty when nothing matches

        Raises:
            ValidationError: If the query is empty
            NetworkError: If the request fails
            ExtractionError: If a result entry has no link
        """
        if not query or not query.strip():
            raise ValidationError("Station query cannot be empty")

        request = StationSearchRequest(query=query)
        url = request.to_search_url(self.config.base_url, self.config.search_path)
        candidates = self._parse_search_page(self.fetcher.fetch(url))
        logger.info(f"Found {len(candidates)} stations for '{query}'")
        return candidates

    def get_station_overview(self, candidate: StationCandidate) -> StationOverview:
        """Fetch the timetable of a station.

        Raises:
            NetworkError: If the request fails
            ExtractionError: If a departure row has no detail link
        """
        soup = self.fetcher.fetch(candidate.overview_link)
        overview = self._parse_overview_page(soup, candidate)
        logger.info(
            f"Parsed {len(overview.departures)} departures at {overview.name}"
        )
        return overview

    def get_departure_detail(self, summary: DepartureSummary) -> DepartureDetail:
        """Fetch live status and service notices of one departure.

        Missing page elements degrade to "on time" without notices.

        Raises:
            NetworkError: If the request fails
        """
        soup = self.fetcher.fetch(summary.detail_link)
        return DepartureDetail.from_summary(
            summary,
            status=self._extract_status(soup, summary.time),
            disruption_texts=self._extract_disruptions(soup),
        )

    def _absolute_link(self, anchor: Tag) -> str:
        href = anchor.get("href")
        if not href:
            raise ExtractionError(
                f"Link '{sanitize_node(anchor)}' has no href attribute"
            )
        return urljoin(self.config.base_url, str(href))

    def _parse_search_page(self, soup: BeautifulSoup) -> list[StationCandidate]:
        """Parse the search results page into station candidates."""
        return [
            StationCandidate(
                name=sanitize_node(anchor),
                overview_link=self._absolute_link(anchor),
            )
            for anchor in soup.select(SEARCH_PAGE.station_links)
        ]

    def _parse_overview_page(
        self, soup: BeautifulSoup, candidate: StationCandidate
    ) -> StationOverview:
        """Parse a station timetable page."""
        name_element = soup.select_one(OVERVIEW_PAGE.station_name)
        if name_element is not None and sanitize_node(name_element):
            name = sanitize_node(name_element)
        else:
            logger.warning(
                f"Station title missing on overview page, using '{candidate.name}'"
            )
            name = candidate.name

        departures = []
        for row in soup.select(OVERVIEW_PAGE.rows):
            departure = self._parse_overview_row(row)
            if departure is not None:
                departures.append(departure)

        return StationOverview(name=name, departures=departures)

    def _parse_overview_row(self, row: Tag) -> DepartureSummary | None:
        """Parse one timetable row.

        Only rows made of time, line and direction cells are departures.
        Other rows carry service notices, which are read from the detail
        pages instead.
        """
        cells = row.select(OVERVIEW_PAGE.cells)
        if len(cells) != OVERVIEW_PAGE.departure_cell_count:
            logger.debug(f"Skipping row with {len(cells)} cells")
            return None

        time_cell, line_cell, direction_cell = cells
        anchor = line_cell.select_one(OVERVIEW_PAGE.detail_link)
        if anchor is None:
            raise ExtractionError(
                f"Line cell '{sanitize_node(line_cell)}' has no detail link"
            )

        line, platform = split_line_platform(sanitize_node(line_cell))
        return DepartureSummary(
            time=sanitize_node(time_cell),
            line=line,
            direction=sanitize_node(direction_cell),
            platform=platform,
            detail_link=self._absolute_link(anchor),
        )

    def _extract_disruptions(self, soup: BeautifulSoup) -> list[str]:
        """Extract non-empty service notices in page order."""
        texts = (sanitize_node(node) for node in soup.select(DETAIL_PAGE.disruptions))
        return [text for text in texts if text]

    def _extract_delay(self, soup: BeautifulSoup, departure_time: str) -> str | None:
        """Extract the delay token of the first route step matching the departure.

        Route steps read like "12:34+2'"; the token follows the clock time
        and ends before the first backslash. Steps reporting no delay are
        passed over.
        """
        for step in soup.select(DETAIL_PAGE.route_steps):
            text = sanitize_node(step)
            if not text.startswith(departure_time) or len(text) <= TIME_PREFIX_LENGTH:
                continue
            token = sanitize(text[TIME_PREFIX_LENGTH:].split(DELAY_TERMINATOR, 1)[0])
            if token and token != NO_DELAY:
                return token
        return None

    def _extract_status(self, soup: BeautifulSoup, departure_time: str) -> str:
        token = self._extract_delay(soup, departure_time)
        if token is None:
            return ON_TIME
        return f"{DELAYED_PREFIX}{token}"
