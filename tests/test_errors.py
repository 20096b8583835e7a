import logging

import pytest

from neurostruct.errors import NsolError, check


def test_check_raises_with_message():
    with pytest.raises(NsolError, match="bad thing"):
        check(False, "bad thing")


def test_error_is_runtime_error():
    with pytest.raises(RuntimeError):
        check(0, "zero is false")


def test_check_logs_error(caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(NsolError):
            check([], "empty list")
    assert "empty list" in caplog.text


def test_check_passes_silently(caplog):
    with caplog.at_level(logging.ERROR):
        check(True, "never seen")
    assert "never seen" not in caplog.text