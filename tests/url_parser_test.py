# tests/url_parser_test.py
import pytest

from atcoder_testcases.domain.exceptions import URLParsingError
from atcoder_testcases.domain.models import ContestId
from atcoder_testcases.domain.parsers.url_parser import URLParser


@pytest.mark.parametrize(
    "url, expected_contest",
    [
        ("https://atcoder.jp/contests/abc100/tasks/abc100_a", "abc100"),
        ("https://atcoder.jp/contests/arc001/tasks/arc001_1", "arc001"),
        (
            "https://atcoder.jp/contests/dwacon2018-final/tasks/dwacon2018_final_a",
            "dwacon2018-final",
        ),
    ],
)
def test_parse_valid_urls(url, expected_contest) -> None:
    contest = URLParser.parse_contest_id(url)

    assert contest == ContestId(expected_contest)


@pytest.mark.parametrize(
    "url",
    [
        "https://codeforces.com/contests/abc100/tasks/abc100_a",
        "https://atcoder.jp/problems/abc100_a",
        "https://atcoder.jp/contests/ABC100/tasks/abc100_a",
        "atcoder.jp/contests/abc100/tasks/abc100_a",
    ],
)
def test_parse_invalid_urls(url) -> None:
    with pytest.raises(URLParsingError):
        URLParser.parse_contest_id(url)


def test_build_contest_urls() -> None:
    contest = ContestId("ABC100")

    assert URLParser.build_contest_url(contest) == "https://atcoder.jp/contests/abc100"
    assert URLParser.build_tasks_url(contest) == "https://atcoder.jp/contests/abc100/tasks"
    assert URLParser.build_tasks_print_url(contest) == (
        "https://atcoder.jp/contests/abc100/tasks_print"
    )
    assert URLParser.build_submissions_url(contest) == (
        "https://atcoder.jp/contests/abc100/submissions/me"
    )


def test_build_url_percent_encodes_arguments() -> None:
    url = URLParser.build_url("/contests/{}", "a b/c")
    assert url == "https://atcoder.jp/contests/a%20b%2Fc"


def test_screen_name() -> None:
    assert URLParser.screen_name("https://atcoder.jp/contests/abc100/tasks/abc100_a") == "abc100_a"

    with pytest.raises(URLParsingError):
        URLParser.screen_name("https://atcoder.jp/contests/abc100/tasks/")


@pytest.mark.parametrize(
    "url",
    [
        "https://atcoder.jp/contests/abc100/tasks/abc100_a",
        "https://AtCoder.jp/contests/abc100/tasks/abc100_a",
        "HTTPS://atcoder.jp:443/contests/abc100/tasks/abc100_a",
        "https://atcoder.jp/contests/abc100/tasks/abc100_a#sample",
    ],
)
def test_normalize_equivalent_urls(url) -> None:
    assert URLParser.normalize_url(url) == "https://atcoder.jp/contests/abc100/tasks/abc100_a"


def test_normalize_keeps_other_ports_and_path_case() -> None:
    assert URLParser.normalize_url("https://atcoder.jp:8443/contests/ABC100") == (
        "https://atcoder.jp:8443/contests/ABC100"
    )


def test_normalize_invalid_port() -> None:
    with pytest.raises(URLParsingError):
        URLParser.normalize_url("https://atcoder.jp:port/contests/abc100")
