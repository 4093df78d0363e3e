"""Tests for logging helpers"""
from fishcart.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging


def test_get_logger_is_cached():
    assert get_logger("fishcart.test") is get_logger("fishcart.test")


def test_sanitize_id():
    assert sanitize_id_for_logging(None) == "N/A"
    assert sanitize_id_for_logging("") == "N/A"
    assert sanitize_id_for_logging("abc") == "abc"
    assert sanitize_id_for_logging("123e4567-e89b-12d3") == "123e4567"


def test_sanitize_id_escapes_newlines():
    assert sanitize_id_for_logging("a\nb") == "a\\nb"


def test_sanitize_string_truncates():
    value = "x" * 60

    assert sanitize_string_for_logging(value, max_length=10) == "x" * 10 + "..."
    assert sanitize_string_for_logging("fake\r\nentry") == "fake\\r\\nentry"


def test_sanitize_string_drops_nul():
    assert sanitize_string_for_logging("Ahven\x00") == "Ahven"
    assert sanitize_string_for_logging(None) == "N/A"
