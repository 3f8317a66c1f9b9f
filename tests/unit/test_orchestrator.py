"""Unit tests for bounded concurrent detail fetching."""

import threading
import time

import pytest

from bvg_departures.core.config import FailurePolicy
from bvg_departures.core.exceptions import ExtractionError, NetworkError
from bvg_departures.core.models import DepartureDetail
from bvg_departures.core.orchestrator import DetailBatch, fetch_departure_details


class CountingFetcher:
    """Fake detail fetcher recording how many calls overlap."""

    def __init__(self, delays=None, failing=(), default_delay=0.02):
        self.delays = delays or {}
        self.failing = set(failing)
        self.default_delay = default_delay
        self.lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls = []

    def __call__(self, summary):
        with self.lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
            self.calls.append(summary.time)
        try:
            time.sleep(self.delays.get(summary.time, self.default_delay))
            if summary.time in self.failing:
                raise NetworkError(f"Failed to fetch {summary.detail_link}")
            return DepartureDetail.from_summary(summary)
        finally:
            with self.lock:
                self.in_flight -= 1


class TestFetchDepartureDetails:
    """Test fetch_departure_details."""

    def test_concurrency_ceiling(self, sample_summaries):
        """Test that exactly two fetches run at a time, never more."""
        fetcher = CountingFetcher(default_delay=0.1)

        batch = fetch_departure_details(sample_summaries, fetcher, concurrency=2)

        assert fetcher.max_in_flight == 2
        assert len(batch.details) == 5
        assert sorted(fetcher.calls) == [s.time for s in sample_summaries]

    def test_concurrency_of_one_is_sequential(self, sample_summaries):
        """Test a single worker."""
        fetcher = CountingFetcher(default_delay=0.005)

        batch = fetch_departure_details(sample_summaries, fetcher, concurrency=1)

        assert fetcher.max_in_flight == 1
        assert fetcher.calls == [s.time for s in sample_summaries]
        assert [d.time for d in batch.details] == fetcher.calls

    def test_fail_fast_raises_first_error(self, sample_summaries):
        """Test that a failure aborts the whole batch."""
        fetcher = CountingFetcher(failing={"12:21"})

        with pytest.raises(NetworkError, match="Failed to fetch"):
            fetch_departure_details(sample_summaries, fetcher, concurrency=2)

        assert fetcher.max_in_flight <= 2

    def test_fail_fast_error_type_is_unchanged(self, sample_summaries):
        """Test that extraction errors propagate as they are."""

        def fetch_detail(summary):
            raise ExtractionError("unexpected page")

        with pytest.raises(ExtractionError, match="unexpected page"):
            fetch_departure_details(sample_summaries, fetch_detail)

    def test_partial_collects_failures(self, sample_summaries):
        """Test best-effort mode."""
        fetcher = CountingFetcher(failing={"12:11", "12:41"})

        batch = fetch_departure_details(
            sample_summaries,
            fetcher,
            concurrency=2,
            failure_policy=FailurePolicy.PARTIAL,
        )

        assert [d.time for d in batch.details] == ["12:01", "12:21", "12:31"]
        assert [f.summary.time for f in batch.failures] == ["12:11", "12:41"]
        assert "Failed to fetch" in batch.failures[0].error
        assert len(batch.details) + len(batch.failures) == 5

    def test_row_order_is_restored(self, sample_summaries):
        """Test that details follow the summary order by default."""
        fetcher = CountingFetcher(delays={"12:01": 0.2}, default_delay=0.01)

        batch = fetch_departure_details(sample_summaries, fetcher, concurrency=2)

        assert [d.time for d in batch.details] == [s.time for s in sample_summaries]

    def test_completion_order(self, sample_summaries):
        """Test that completion order is kept on request."""
        fetcher = CountingFetcher(delays={"12:01": 0.2}, default_delay=0.01)

        batch = fetch_departure_details(
            sample_summaries, fetcher, concurrency=2, preserve_order=False
        )

        assert batch.details[-1].time == "12:01"
        assert len(batch.details) == 5

    def test_empty_input(self):
        """Test that nothing is fetched for no departures."""
        fetcher = CountingFetcher()

        assert fetch_departure_details([], fetcher) == DetailBatch()
        assert fetcher.calls == []

    @pytest.mark.parametrize("concurrency", [0, -1])
    def test_invalid_concurrency(self, sample_summaries, concurrency):
        """Test concurrency validation."""
        with pytest.raises(ValueError, match="Concurrency must be at least 1"):
            fetch_departure_details(
                sample_summaries, CountingFetcher(), concurrency=concurrency
            )

    def test_unexpected_errors_always_propagate(self, sample_summaries):
        """Test that programming errors are not collected as failures."""

        def fetch_detail(summary):
            raise KeyError("bug")

        with pytest.raises(KeyError):
            fetch_departure_details(
                sample_summaries, fetch_detail, failure_policy=FailurePolicy.PARTIAL
            )
