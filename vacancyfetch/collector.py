"""
Concurrent fan-out of detail fetches with fan-in into one result set.

Every identifier gets its own unit of work on a thread pool. Results are
gathered as they complete, so their order does not follow the input. A
failing unit contributes a failed FetchResult and never stops its siblings.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from .detail import FetchResult, fetch_detail, session_scope
from .env import DEFAULT_MAX_WORKERS
from .logger import get_logger

logger = get_logger()

Fetcher = Callable[..., FetchResult]


@dataclass
class CollectionResult:
    """Records and failures of one batch, in completion order."""

    records: List[Dict[str, Any]] = field(default_factory=list)
    failures: List[FetchResult] = field(default_factory=list)
    launched: int = 0

    @property
    def failed(self) -> int:
        return len(self.failures)


def detail_identifiers(identifiers: Sequence[str]) -> List[str]:
    """Identifiers the detail pipeline actually fetches.

    The first parsed identifier is dropped as a stray header remnant.
    Whether that is intended is still an open question for the portal's
    owners, so it is kept as-is.
    """
    return list(identifiers[1:])


def _run_unit(fetcher: Fetcher, identifier: str, token: str, **kwargs) -> FetchResult:
    logger.record_fetch_attempt()
    try:
        result = fetcher(identifier, token, **kwargs)
    except Exception as e:
        # Custom fetchers may raise; the unit still has to report.
        logger.error("Detail fetch raised", id=identifier, error=str(e))
        result = FetchResult(identifier, error=str(e), error_type=type(e).__name__)

    if not isinstance(result, FetchResult):
        logger.error("Detail fetch returned no FetchResult", id=identifier, kind=type(result).__name__)
        result = FetchResult(
            identifier,
            error=f"fetcher returned {type(result).__name__}",
            error_type="UnexpectedResult",
        )

    if result.ok:
        logger.record_fetch_success()
    else:
        logger.record_fetch_failure(result.error_type or "Unknown")
    return result


def collect(
    identifiers: Sequence[str],
    token: str,
    fetcher: Fetcher = fetch_detail,
    max_workers: Optional[int] = DEFAULT_MAX_WORKERS,
    session: Optional[requests.Session] = None,
    **fetch_kwargs,
) -> CollectionResult:
    """
    Fetch details for all identifiers concurrently.

    Args:
        identifiers: Identifiers to fetch, one unit of work each
        token: Anti-forgery token shared by every request
        fetcher: Called as fetcher(identifier, token, **kwargs); must return a FetchResult
        max_workers: Pool size; None runs one thread per identifier
        session: Shared HTTP session (a new one is created when omitted)
        **fetch_kwargs: Extra keyword arguments for the fetcher (url, timeout)

    Returns:
        CollectionResult once every unit has finished. Even when every
        unit fails this returns normally with no records.
    """
    result = CollectionResult(launched=len(identifiers))
    if not identifiers:
        logger.info("No identifiers to fetch")
        return result

    workers = len(identifiers) if max_workers is None else max(1, min(max_workers, len(identifiers)))
    logger.info(f"Fetching {len(identifiers)} details", workers=workers)

    # fetch_detail shares one session across units; custom fetchers get one only if passed in.
    pass_session = fetcher is fetch_detail or session is not None
    with session_scope(session) as client:
        if pass_session:
            fetch_kwargs["session"] = client
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="detail") as pool:
            futures = [
                pool.submit(_run_unit, fetcher, identifier, token, **fetch_kwargs)
                for identifier in identifiers
            ]
            for future in as_completed(futures):
                unit = future.result()
                if unit.ok:
                    result.records.append(unit.record)
                else:
                    result.failures.append(unit)

    logger.info(
        f"Collected {len(result.records)}/{result.launched} details",
        failed=result.failed,
    )
    return result
