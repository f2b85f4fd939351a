"""Tests for common utilities."""

import json
import logging

from microlink.common.logging_config import JsonFormatter, setup_logging
from microlink.common.urls import build_base_url, build_short_url
from microlink.common.validators import is_valid_short_code, is_valid_url, normalize_target_url


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        valid, _ = is_valid_url("https://example.com")
        assert valid

        valid, _ = is_valid_url("http://example.com/path")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid

    def test_invalid_urls(self):
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

        valid, error = is_valid_url("https://")
        assert not valid
        assert "domain" in error.lower()

        valid, error = is_valid_url("https://" + "a" * 2050)
        assert not valid
        assert "too long" in error.lower()

    def test_normalize_adds_https_scheme(self):
        assert normalize_target_url("example.com") == "https://example.com"
        assert normalize_target_url("  example.com/path  ") == "https://example.com/path"
        assert normalize_target_url("example.com:8080/x") == "https://example.com:8080/x"

    def test_normalize_scheme_only_checked_at_start(self):
        assert (
            normalize_target_url("example.com/login?next=https://example.com/home")
            == "https://example.com/login?next=https://example.com/home"
        )
        assert normalize_target_url("HTTP://example.com") == "HTTP://example.com"

    def test_normalize_keeps_existing_scheme(self):
        assert normalize_target_url("http://example.com") == "http://example.com"
        assert normalize_target_url("https://example.com") == "https://example.com"

    def test_normalize_empty(self):
        assert normalize_target_url("") == ""
        assert normalize_target_url("   ") == ""

    def test_valid_short_codes(self):
        for code in ("vibe", "dup", "a", "test-code", "test_code", "MixedCase1", "v1.0", "a~b", "café", "abc@123", "api"):
            valid, error = is_valid_short_code(code)
            assert valid, error

    def test_invalid_short_codes(self):
        valid, error = is_valid_short_code("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_short_code("a" * 65)
        assert not valid
        assert "at most" in error.lower()

        for code in ("with/slash", "what?", "frag#ment", "back\\slash", "two words", "tab\tcode", "nul\x00", ".", ".."):
            valid, error = is_valid_short_code(code)
            assert not valid, code

    def test_reserved_short_codes(self):
        valid, error = is_valid_short_code("healthz")
        assert not valid
        assert "reserved" in error.lower()

        # Only the exact path is served by the app
        valid, _ = is_valid_short_code("HEALTHZ")
        assert valid


class TestURLs:
    """Test short URL building."""

    def test_build_base_url_from_forwarded_headers(self):
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "sho.rt",
        }

        base_url = build_base_url(
            headers=headers,
            fallback_base_url="http://localhost:3001",
            request_scheme="http",
            request_host="internal:3001",
        )

        assert base_url == "https://sho.rt"

    def test_build_base_url_from_request(self):
        base_url = build_base_url(
            headers={},
            fallback_base_url="http://localhost:3001",
            request_scheme="http",
            request_host="links.local",
        )

        assert base_url == "http://links.local"

    def test_build_base_url_fallback(self):
        base_url = build_base_url(headers={}, fallback_base_url="http://localhost:3001/")

        assert base_url == "http://localhost:3001"

    def test_build_short_url_no_prefix(self):
        assert build_short_url("vibe", "https://sho.rt") == "https://sho.rt/vibe"

    def test_build_short_url_with_prefix(self):
        assert build_short_url("vibe", "https://sho.rt/", "/s/") == "https://sho.rt/s/vibe"


class TestLogging:
    """Test logging setup."""

    def test_json_formatter_escapes_message(self):
        record = logging.LogRecord(
            name="microlink",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg='Created link "vibe" -> %s',
            args=("https://example.com/?q=\"x\"\\y",),
            exc_info=None,
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "microlink"
        assert data["message"] == 'Created link "vibe" -> https://example.com/?q="x"\\y'

    def test_setup_logging_json(self):
        logger = setup_logging(level="WARNING", json_format=True)

        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
