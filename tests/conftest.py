"""Shared fixtures: a recording shell, a fake site and HTML page builders."""

from collections import defaultdict, deque
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import httpx
import pytest

from atcoder_testcases.config import Settings
from atcoder_testcases.infrastructure import StatusCodeColor
from atcoder_testcases.services import create_session

JST = timezone(timedelta(hours=9))


class RecordingShell:
    """Shell that keeps every message instead of printing it."""

    def __init__(self):
        self.messages: list[str] = []
        self.warnings: list[str] = []

    def progress_file(self):
        return None

    def warn(self, message: object) -> None:
        self.warnings.append(str(message))
        self.messages.append(f"WARNING {message}")

    def on_request(self, method: str, url: str) -> None:
        self.messages.append(f"{method} {url}")

    def on_response(self, status_code: int, color: StatusCodeColor) -> None:
        self.messages.append(f"{status_code} {color.value}")


class FakeSite:
    """``httpx.MockTransport`` handler serving queued responses per route."""

    def __init__(self):
        self.routes: dict[tuple[str, str], deque] = defaultdict(deque)
        self.requests: list[httpx.Request] = []

    def add(self, method: str, url: str, status: int = 200, **kwargs: Any) -> "FakeSite":
        self.routes[(method, url)].append((status, kwargs))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        queue = self.routes[(request.method, str(request.url))]
        if not queue:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        status, kwargs = queue.popleft()
        return httpx.Response(status, **kwargs)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def sent(self, method: str, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and str(r.url) == url]


class Prompts:
    """Credential provider recording how often it was asked."""

    def __init__(self, username: str = "alice", password: str = "hunter2"):
        self.username = username
        self.password = password
        self.calls: list[tuple[str, str]] = []

    def __call__(self, username_prompt: str, password_prompt: str) -> tuple[str, str]:
        self.calls.append((username_prompt, password_prompt))
        return self.username, self.password


@pytest.fixture
def shell() -> RecordingShell:
    return RecordingShell()


@pytest.fixture
def site() -> FakeSite:
    return FakeSite()


@pytest.fixture
def prompts() -> Prompts:
    return Prompts()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(cookies_path=tmp_path / "cookies.jsonl", timeout=5.0)


@pytest.fixture
def session(settings, shell, site):
    with create_session(settings, shell, transport=site.transport()) as session:
        yield session


def html_page(body: str, title: str = "AtCoder") -> str:
    return f"<!DOCTYPE html><html><head><title>{title}</title></head><body>{body}</body></html>"


def login_page(csrf_token: str = "tok1") -> str:
    return html_page(
        '<form method="POST" action="/login">'
        f'<input type="hidden" name="csrf_token" value="{csrf_token}">'
        '<input name="username"><input name="password" type="password">'
        "</form>"
    )


def format_time(moment: datetime) -> str:
    return moment.astimezone(JST).strftime("%Y-%m-%d %H:%M:%S%z")


def contest_page(
    start: datetime,
    end: datetime,
    registration: bool = False,
    csrf_token: str = "tok2",
) -> str:
    if registration:
        form = (
            '<form method="POST" action="register">'
            f'<input type="hidden" name="csrf_token" value="{csrf_token}">'
            '<button type="submit" class="btn btn-lg btn-primary">参加登録</button>'
            "</form>"
        )
    else:
        form = '<p class="text-center">参加登録済み</p>'
    return html_page(
        '<div id="main-container">'
        '<div class="contest-duration">'
        f'<a><time class="fixtime-full">{format_time(start)}</time></a>'
        " - "
        f'<a><time class="fixtime-full">{format_time(end)}</time></a>'
        "</div>"
        f'<div class="insert-participant-box">{form}</div>'
        "</div>"
    )


def tasks_page(contest_title: str, rows: list[tuple[str, str]]) -> str:
    trs = "".join(
        f'<tr><td class="text-center no-break"><a href="{href}">{index}</a></td>'
        f'<td><a href="{href}">Problem {index}</a></td></tr>'
        for index, href in rows
    )
    return html_page(
        '<div id="main-container"><div class="row"><div class="col-sm-12">'
        '<div class="panel panel-default table-responsive">'
        f'<table class="table table-bordered table-striped"><tbody>{trs}</tbody></table>'
        "</div></div></div></div>",
        title=f"Tasks - {contest_title}",
    )


def _sample_parts(samples: list[tuple[str, str]], input_label: str, output_label: str) -> str:
    return "".join(
        f'<div class="part"><section><h3>{input_label} {i}</h3><pre>{input_}</pre></section></div>'
        f'<div class="part"><section><h3>{output_label} {i}</h3>'
        f"<pre>{output}</pre></section></div>"
        for i, (input_, output) in enumerate(samples, start=1)
    )


def current_statement(samples: list[tuple[str, str]], extra: str = "") -> str:
    """Task statement in the bilingual layout used since 2016."""
    return (
        '<span class="lang">'
        '<span class="lang-ja">'
        f'<div class="part"><section><h3>問題文</h3><p>{extra}</p></section></div>'
        f"{_sample_parts(samples, '入力例', '出力例')}</span>"
        f'<span class="lang-en">{_sample_parts(samples, "Sample Input", "Sample Output")}</span>'
        "</span>"
    )


def legacy_statement(samples: list[tuple[str, str]], extra: str = "") -> str:
    """Japanese-only statement without language wrappers (ABC007..ABC040 era)."""
    return (
        f'<div class="part"><section><h3>問題文</h3><p>{extra}</p></section></div>'
        f"{_sample_parts(samples, '入力例', '出力例')}"
    )


def task_block(index: str, name: str, statement: str, timelimit: str = "2 sec") -> str:
    return (
        '<div class="col-sm-12">'
        f'<span class="h2">{index} - {name}</span>'
        f"<p>Time Limit: {timelimit} / Memory Limit: 1024 MB</p>"
        f'<div id="task-statement">{statement}</div>'
        "</div>"
    )


def tasks_print_page(*blocks: str) -> str:
    return html_page(f'<div id="main-container"><div class="row">{"".join(blocks)}</div></div>')


def window(
    now: Optional[datetime] = None,
    started: timedelta = timedelta(hours=1),
    ends_in: timedelta = timedelta(hours=1),
) -> tuple[datetime, datetime]:
    now = now or datetime.now(timezone.utc)
    return now - started, now + ends_in
