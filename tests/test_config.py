"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from vendor_risk_dashboard.config import DEFAULT_ACCESS_HEADER, Settings
from vendor_risk_dashboard.core.clients import upguard
from vendor_risk_dashboard.core.vendors import DEFAULT_VENDORS


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.upguard_api_key == ""
        assert settings.require_access is False
        assert settings.access_header == DEFAULT_ACCESS_HEADER
        assert settings.default_vendors == DEFAULT_VENDORS
        assert settings.upguard_api_base == upguard.API_BASE
        assert settings.score_fetch_concurrency == upguard.DEFAULT_CONCURRENCY

    def test_api_key_is_trimmed(self):
        assert Settings.from_env({"UPGUARD_API_KEY": "  abc \n"}).upguard_api_key == "abc"

    def test_whitespace_api_key_counts_as_missing(self):
        assert Settings.from_env({"UPGUARD_API_KEY": "   "}).upguard_api_key == ""

    @pytest.mark.parametrize("value, expected", [("1", True), ("0", False), ("true", False), ("", False), (" 1", False)])
    def test_require_access_only_on_exact_one(self, value, expected):
        assert Settings.from_env({"REQUIRE_ACCESS": value}).require_access is expected

    def test_default_vendors_override(self):
        settings = Settings.from_env({"DEFAULT_VENDORS": "x.gov, y.gov,x.gov"})
        assert settings.default_vendors == ("x.gov", "y.gov")

    def test_blank_default_vendors_keeps_builtin(self):
        assert Settings.from_env({"DEFAULT_VENDORS": " , "}).default_vendors == DEFAULT_VENDORS

    def test_numeric_options(self):
        settings = Settings.from_env({
            "UPGUARD_TIMEOUT_SECONDS": "5.5",
            "SCORE_FETCH_CONCURRENCY": "2",
            "PORT": "9000",
        })
        assert settings.upguard_timeout_seconds == 5.5
        assert settings.score_fetch_concurrency == 2
        assert settings.port == 9000

    @pytest.mark.parametrize("name, value", [
        ("SCORE_FETCH_CONCURRENCY", "0"),
        ("SCORE_FETCH_CONCURRENCY", "many"),
        ("UPGUARD_TIMEOUT_SECONDS", "-1"),
        ("PORT", "70000"),
    ])
    def test_invalid_numbers_fail_fast(self, name, value):
        with pytest.raises(ValidationError):
            Settings.from_env({name: value})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("UPGUARD_API_KEY", "from-env")
        monkeypatch.setenv("ACCESS_HEADER", "X-Front-Door")
        settings = Settings.from_env()
        assert settings.upguard_api_key == "from-env"
        assert settings.access_header == "X-Front-Door"
