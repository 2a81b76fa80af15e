from typing import Optional

import requests

from .collector import CollectionResult, collect, detail_identifiers
from .csrf import fetch_token
from .detail import fetch_all_jobs, fetch_detail, session_scope
from .env import Settings
from .identifiers import load_identifiers
from .logger import get_logger
from .writer import write_records

logger = get_logger()


def _token(settings: Settings, session: requests.Session) -> str:
    token = fetch_token(settings.job_url, session=session, timeout=settings.timeout)
    if not token:
        # The portal still answers without one; the requests just fail.
        logger.error("Continuing without a token", url=settings.job_url)
    return token


def run_listing(settings: Settings, session: Optional[requests.Session] = None) -> int:
    """Fetch the bulk listing and write it to settings.listing_path.

    Returns the number of rows written (0 when nothing was written).
    """
    with session_scope(session) as client:
        token = _token(settings, client)
        jobs = fetch_all_jobs(
            token,
            session=client,
            url=settings.load_record_url,
            company=settings.company,
            timeout=settings.timeout,
        )
    if not write_records(jobs, settings.listing_path):
        return 0
    return len(jobs)


def run_details(settings: Settings, session: Optional[requests.Session] = None) -> CollectionResult:
    """Fetch details for every listed vacancy and write them to settings.details_path."""
    with session_scope(session) as client:
        token = _token(settings, client)

        identifiers = load_identifiers(settings.listing_path, settings.id_column)
        result = collect(
            detail_identifiers(identifiers),
            token,
            fetcher=fetch_detail,
            max_workers=settings.max_workers,
            session=client,
            url=settings.detail_url,
            timeout=settings.timeout,
        )

    write_records(result.records, settings.details_path)
    logger.log_metrics_summary()
    return result
