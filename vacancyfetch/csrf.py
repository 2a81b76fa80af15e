"""Anti-forgery token lookup from the portal's job page."""

from typing import Optional

import requests
from bs4 import BeautifulSoup

from .detail import session_scope
from .env import TOKEN_FIELD, Settings
from .logger import get_logger

logger = get_logger()

JOB_URL = Settings().job_url


def extract_token(html: str) -> str:
    """Return the value of the hidden token input, or "" if there is none."""
    soup = BeautifulSoup(html, "html.parser")
    field = soup.find("input", attrs={"name": TOKEN_FIELD})
    if field is None:
        return ""
    return field.get("value") or ""


def fetch_token(url: str = JOB_URL, session: Optional[requests.Session] = None, timeout=None) -> str:
    """GET the job page and pull the anti-forgery token out of it.

    Returns "" when the request fails or the page carries no token; the
    caller decides whether to carry on without one.
    """
    logger.record_api_call()
    try:
        with session_scope(session) as client:
            resp = client.get(url, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("Error getting token", url=url, error=str(e))
        return ""

    token = extract_token(resp.text)
    if not token:
        logger.error("Token input not found in page", url=url, field=TOKEN_FIELD, status=resp.status_code)
        return ""
    logger.info("Fetched token", url=url)
    return token
