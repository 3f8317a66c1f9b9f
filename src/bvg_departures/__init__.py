"""BVG Departures Package

A Python package for looking up live BVG departures from the mobile
timetable pages, with a terminal CLI.
"""

__version__ = "0.1.0"

from .core.models import DepartureDetail, StationCandidate, StationDetail
from .core.pipeline import DeparturePipeline
from .core.scraper import BvgDepartureScraper

__all__ = [
    "BvgDepartureScraper",
    "DepartureDetail",
    "DeparturePipeline",
    "StationCandidate",
    "StationDetail",
]
