"""Unit tests for status classification and the loguru-backed shell."""

import sys

import pytest
from loguru import logger

from atcoder_testcases.infrastructure import LoguruShell, StatusCodeColor


@pytest.mark.parametrize(
    "status, expected",
    [
        (200, StatusCodeColor.PASS),
        (404, StatusCodeColor.WARNING),
        (500, StatusCodeColor.ERROR),
    ],
)
def test_classify_with_any_other_as_error(status, expected):
    assert StatusCodeColor.classify(status, passing=(200,), warning=(404,)) is expected


def test_classify_unknown():
    assert StatusCodeColor.classify(418, passing=(200,), error=(500,)) is StatusCodeColor.UNKNOWN


@pytest.fixture
def records():
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(handler_id)


def test_loguru_shell_reports(records):
    shell = LoguruShell(show_progress=False)

    shell.on_request("GET", "https://atcoder.jp/settings")
    shell.on_response(302, StatusCodeColor.WARNING)
    shell.warn("could not find `C` in `tasks_print`")

    assert [(r["level"].name, r["message"]) for r in records] == [
        ("INFO", "GET https://atcoder.jp/settings ..."),
        ("INFO", "302"),
        ("WARNING", "could not find `C` in `tasks_print`"),
    ]
    assert shell.progress_file() is None
    assert LoguruShell().progress_file() is sys.stderr
