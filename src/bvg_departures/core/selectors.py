"""CSS selectors for the timetable page family.

Every assumption about upstream markup lives here, grouped by page type,
so a markup change only needs an update of this table.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchPageSelectors:
    """Search results page."""

    station_links: str = ".select a"


@dataclass(frozen=True)
class OverviewPageSelectors:
    """Station timetable page."""

    station_name: str = "#ivu_overview_input strong"
    rows: str = ".ivu_table tbody tr"
    cells: str = "td"
    detail_link: str = "a"
    departure_cell_count: int = 3


@dataclass(frozen=True)
class DetailPageSelectors:
    """Single departure (journey) page."""

    disruptions: str = ".journeyMessageHIM"
    route_steps: str = "#ivu_trainroute_table tr .tqTime"


SEARCH_PAGE = SearchPageSelectors()
OVERVIEW_PAGE = OverviewPageSelectors()
DETAIL_PAGE = DetailPageSelectors()
