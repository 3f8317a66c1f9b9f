"""Core departure lookup functionality."""

from .config import FailurePolicy, ScraperConfig
from .exceptions import (
    DepartureSearchError,
    ExtractionError,
    NetworkError,
    ValidationError,
)
from .fetcher import DocumentFetcher
from .models import (
    DepartureDetail,
    DepartureFailure,
    DepartureSummary,
    StationCandidate,
    StationDetail,
    StationOverview,
    StationSearchRequest,
)
from .orchestrator import DetailBatch, fetch_departure_details
from .pipeline import DeparturePipeline, merge_disruptions
from .scraper import BvgDepartureScraper

__all__ = [
    "BvgDepartureScraper",
    "DepartureDetail",
    "DepartureFailure",
    "DeparturePipeline",
    "DepartureSearchError",
    "DepartureSummary",
    "DetailBatch",
    "DocumentFetcher",
    "ExtractionError",
    "FailurePolicy",
    "NetworkError",
    "ScraperConfig",
    "StationCandidate",
    "StationDetail",
    "StationOverview",
    "StationSearchRequest",
    "ValidationError",
    "fetch_departure_details",
    "merge_disruptions",
]
