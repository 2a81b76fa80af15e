"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from vacancyfetch.env import DEFAULT_MAX_WORKERS, Settings, get_settings, load_env

ENV_VARS = [
    "VACANCYFETCH_BASE_URL",
    "VACANCYFETCH_LISTING_PATH",
    "VACANCYFETCH_DETAILS_PATH",
    "VACANCYFETCH_ID_COLUMN",
    "VACANCYFETCH_COMPANY",
    "VACANCYFETCH_MAX_WORKERS",
    "VACANCYFETCH_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        # setenv first so teardown restores the variable to its prior state
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestSettings:
    def test_defaults(self):
        settings = get_settings()

        assert settings.job_url == "https://rekrutmenbersama2024.fhcibumn.id/job"
        assert settings.listing_path == Path("data/all_jobs.csv")
        assert settings.details_path == Path("data/details.csv")
        assert settings.id_column == "vacancy_id"
        assert settings.max_workers == DEFAULT_MAX_WORKERS
        assert settings.timeout is None

    def test_endpoints_follow_base_url(self):
        settings = Settings(base_url="https://portal.example/")

        assert settings.job_url == "https://portal.example/job"
        assert settings.load_record_url == "https://portal.example/job/loadRecord"
        assert settings.detail_url == "https://portal.example/job/get_detail_vac"

    def test_overrides_from_environment(self, monkeypatch):
        monkeypatch.setenv("VACANCYFETCH_BASE_URL", "https://portal.example")
        monkeypatch.setenv("VACANCYFETCH_DETAILS_PATH", "out/d.csv")
        monkeypatch.setenv("VACANCYFETCH_ID_COLUMN", "id")
        monkeypatch.setenv("VACANCYFETCH_MAX_WORKERS", "4")
        monkeypatch.setenv("VACANCYFETCH_TIMEOUT", "2.5")

        settings = get_settings()

        assert settings.base_url == "https://portal.example"
        assert settings.details_path == Path("out/d.csv")
        assert settings.id_column == "id"
        assert settings.max_workers == 4
        assert settings.timeout == 2.5

    def test_zero_workers_means_unbounded(self, monkeypatch):
        monkeypatch.setenv("VACANCYFETCH_MAX_WORKERS", "0")

        assert get_settings().max_workers is None

    def test_invalid_workers(self, monkeypatch):
        monkeypatch.setenv("VACANCYFETCH_MAX_WORKERS", "-1")

        with pytest.raises(ValueError):
            get_settings()


class TestLoadEnv:
    def test_reads_dotenv_from_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("VACANCYFETCH_ID_COLUMN=job_id\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        load_env()

        assert get_settings().id_column == "job_id"

    def test_missing_dotenv_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        load_env()

        assert get_settings().id_column == "vacancy_id"
