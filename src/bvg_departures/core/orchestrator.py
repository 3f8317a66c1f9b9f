"""Bounded concurrent fetching of departure detail pages."""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from .config import DEFAULT_CONCURRENCY, FailurePolicy
from .exceptions import DepartureSearchError
from .models import DepartureDetail, DepartureFailure, DepartureSummary

logger = logging.getLogger(__name__)

DetailFetcher = Callable[[DepartureSummary], DepartureDetail]


@dataclass
class DetailBatch:
    """Outcome of a detail fetch run."""

    details: list[DepartureDetail] = field(default_factory=list)
    failures: list[DepartureFailure] = field(default_factory=list)


def fetch_departure_details(
    summaries: Sequence[DepartureSummary],
    fetch_detail: DetailFetcher,
    concurrency: int = DEFAULT_CONCURRENCY,
    failure_policy: FailurePolicy = FailurePolicy.FAIL_FAST,
    preserve_order: bool = True,
) -> DetailBatch:
    """Fetch the detail of every departure with a fixed number of workers.

    At most ``concurrency`` fetches run at the same time; a worker picks up
    the next pending departure as soon as its current fetch returns.

    Args:
        summaries: Departures to fetch details for
        fetch_detail: Callable fetching one departure detail
        concurrency: Maximum number of fetches in flight
        failure_policy: FAIL_FAST re-raises the first error, PARTIAL collects
            failures next to the successful details
        preserve_order: Return details in the order of ``summaries`` instead
            of completion order

    Returns:
        Batch of details, plus failures in PARTIAL mode

    Raises:
        ValueError: If concurrency is lower than 1
        DepartureSearchError: First fetch error, in FAIL_FAST mode
    """
    if concurrency < 1:
        raise ValueError(f"Concurrency must be at least 1, got {concurrency}")

    if not summaries:
        return DetailBatch()

    completed: list[tuple[int, DepartureDetail]] = []
    failed: list[tuple[int, DepartureFailure]] = []

    logger.info(
        f"Fetching {len(summaries)} departure details, {concurrency} at a time"
    )
    executor = ThreadPoolExecutor(
        max_workers=concurrency, thread_name_prefix="departure-detail"
    )
    try:
        futures: dict[Future[DepartureDetail], int] = {
            executor.submit(fetch_detail, summary): index
            for index, summary in enumerate(summaries)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                completed.append((index, future.result()))
            except DepartureSearchError as e:
                if failure_policy is FailurePolicy.FAIL_FAST:
                    logger.error(
                        f"Aborting detail fetch, {summaries[index]} failed: {e}"
                    )
                    raise
                logger.warning(f"Departure {summaries[index]} failed: {e}")
                failed.append(
                    (index, DepartureFailure(summary=summaries[index], error=str(e)))
                )
    finally:
        executor.shutdown(wait=True, cancel_futures=True)

    if preserve_order:
        completed.sort(key=lambda item: item[0])
        failed.sort(key=lambda item: item[0])

    logger.info(
        f"Fetched {len(completed)} departure details, {len(failed)} failed"
    )
    return DetailBatch(
        details=[detail for _, detail in completed],
        failures=[failure for _, failure in failed],
    )
