"""Authenticated JSON endpoints: per-vacancy detail and bulk listing."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from .env import TOKEN_COOKIE, TOKEN_FIELD, Settings
from .logger import get_logger

logger = get_logger()

LOAD_RECORD_URL = Settings().load_record_url
DETAIL_URL = Settings().detail_url


@contextmanager
def session_scope(session: Optional[requests.Session] = None):
    """Yield the given session, or a new one that is closed on exit."""
    if session is not None:
        yield session
        return
    with requests.Session() as owned:
        yield owned


@dataclass
class FetchResult:
    """Outcome of one detail fetch: a record on success, an error otherwise."""

    identifier: str
    record: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def _post_form(client: requests.Session, url: str, token: str, fields: Dict[str, str], timeout=None) -> requests.Response:
    """POST a form carrying the token both as a field and as a cookie."""
    data = {TOKEN_FIELD: token, **fields}
    headers = {
        "Content-Type": "application/x-www-form-urlencoded",
        "Cookie": f"{TOKEN_COOKIE}={token}",
    }
    logger.record_api_call()
    return client.post(url, data=data, headers=headers, timeout=timeout)


def fetch_detail(
    identifier: str,
    token: str,
    session: Optional[requests.Session] = None,
    url: str = DETAIL_URL,
    timeout=None,
) -> FetchResult:
    """Fetch the detail record of one vacancy.

    The response status is not inspected: whatever body comes back is
    decoded as JSON, and only a JSON object counts as a record. Never raises.
    """
    try:
        with session_scope(session) as client:
            resp = _post_form(client, url, token, {"id": identifier}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("Error making request", id=identifier, error=str(e))
        return FetchResult(identifier, error=str(e), error_type=type(e).__name__)

    try:
        payload = resp.json()
    except ValueError as e:
        logger.error("Error decoding JSON", id=identifier, status=resp.status_code, error=str(e))
        return FetchResult(identifier, error=f"invalid JSON: {e}", error_type="JSONDecodeError")

    if not isinstance(payload, dict):
        logger.error("Detail payload is not an object", id=identifier, kind=type(payload).__name__)
        return FetchResult(
            identifier,
            error=f"expected a JSON object, got {type(payload).__name__}",
            error_type="UnexpectedPayload",
        )

    logger.debug("Fetched detail", id=identifier)
    return FetchResult(identifier, record=payload)


def fetch_all_jobs(
    token: str,
    session: Optional[requests.Session] = None,
    url: str = LOAD_RECORD_URL,
    company: str = "all",
    timeout=None,
) -> List[Dict[str, Any]]:
    """Fetch the bulk vacancy listing (`data.result` of the response).

    Any failure is logged and yields an empty list.
    """
    try:
        with session_scope(session) as client:
            resp = _post_form(client, url, token, {"company": company}, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("Error making request", url=url, error=str(e))
        return []

    try:
        payload = resp.json()
    except ValueError as e:
        logger.error("Error decoding JSON", url=url, status=resp.status_code, error=str(e))
        return []

    result = None
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        result = payload["data"].get("result")
    if not isinstance(result, list):
        logger.error("Listing payload has no data.result list", url=url)
        return []

    jobs = [job for job in result if isinstance(job, dict)]
    if len(jobs) != len(result):
        logger.warning(f"Dropped {len(result) - len(jobs)} non-object listing entries", url=url)
    logger.info(f"Total jobs: {len(jobs)}", company=company)
    return jobs
