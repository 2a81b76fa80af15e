"""
Pytest configuration and shared fixtures.
"""

import os
import tempfile
from pathlib import Path
from typing import Dict

# Module-level loggers are built at import time; keep their files out of the repo.
os.environ.setdefault("VACANCYFETCH_LOG_DIR", tempfile.mkdtemp(prefix="vacancyfetch-logs-"))

import pytest


@pytest.fixture
def token_page_html() -> str:
    """Job page carrying the hidden anti-forgery input."""
    return """
    <html>
    <head><title>Rekrutmen Bersama BUMN</title></head>
    <body>
        <form id="filter">
            <input type="hidden" name="csrf_fhci" value="abc123token">
            <select name="company"><option value="all">All</option></select>
        </form>
    </body>
    </html>
    """


@pytest.fixture
def listing_csv(tmp_path) -> Path:
    """Listing CSV as written by the listing command."""
    path = tmp_path / "all_jobs.csv"
    path.write_text(
        "vacancy_id,vacancy_name,company_name\n"
        "101,Data Analyst,PT Alpha\n"
        "102,Backend Engineer,PT Beta\n"
        "103,Accountant,PT Gamma\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def detail_payloads() -> Dict[str, dict]:
    """Detail responses keyed by vacancy id."""
    return {
        "101": {"vacancy_id": "101", "vacancy_name": "Data Analyst", "quota": 2},
        "102": {"vacancy_id": "102", "vacancy_name": "Backend Engineer", "quota": 1},
        "103": {"vacancy_id": "103", "vacancy_name": "Accountant", "quota": 3},
    }
