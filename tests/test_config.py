"""Tests for CheckConfig validation and duration parsing."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sitecheck.models.check_config import CheckConfig
from sitecheck.services.duration import parse_duration


class TestParseDuration:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("10s", 10.0),
            ("5m", 300.0),
            ("1h", 3600.0),
            ("250ms", 0.25),
            ("1m30s", 90.0),
            ("1.5s", 1.5),
            ("42", 42.0),
            (" 2m ", 120.0),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["", "abc", "10x", "5m junk", "0s", "-3", "inf", "nan"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)


class TestCheckConfig:
    def test_defaults(self):
        config = CheckConfig()
        assert config.base_url == "http://localhost:1313"
        assert config.content_dir == Path("content")
        assert config.workers == 100
        assert config.timeout == 300.0

    def test_trailing_slash_stripped(self):
        assert CheckConfig(base_url="https://example.com/").base_url == "https://example.com"

    def test_rejects_non_http_scheme(self):
        with pytest.raises(ValidationError):
            CheckConfig(base_url="ftp://example.com")

    def test_rejects_missing_host(self):
        with pytest.raises(ValidationError):
            CheckConfig(base_url="http://")

    def test_rejects_zero_workers(self):
        with pytest.raises(ValidationError):
            CheckConfig(workers=0)

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            CheckConfig(timeout=0)
