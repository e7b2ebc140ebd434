"""Builder and parser for AtCoder URLs."""

import re
from urllib.parse import quote, urljoin, urlparse, urlunparse

from loguru import logger

from atcoder_testcases.domain.exceptions import URLParsingError
from atcoder_testcases.domain.models import ContestId


class URLParser:
    """Builds site URLs and extracts contest ids from problem URLs."""

    BASE_URL = "https://atcoder.jp"
    DOMAIN = "atcoder.jp"
    DEFAULT_PORTS = {"http": 80, "https": 443}
    # Matches: /contests/abc100/tasks/abc100_a
    CONTEST_PATH_PATTERN = re.compile(r"\A/contests/([a-z0-9_\-]+)/.*\Z")

    @classmethod
    def build_url(cls, path_template: str, *args: object) -> str:
        """
        Join a path onto the site root, percent-encoding every argument.
        """
        path = path_template.format(*(quote(str(arg), safe="") for arg in args))
        return urljoin(cls.BASE_URL, path)

    @classmethod
    def join(cls, href: str) -> str:
        return urljoin(cls.BASE_URL, href)

    @classmethod
    def build_contest_url(cls, contest: ContestId) -> str:
        return cls.build_url("/contests/{}", contest)

    @classmethod
    def build_tasks_url(cls, contest: ContestId) -> str:
        return cls.build_url("/contests/{}/tasks", contest)

    @classmethod
    def build_tasks_print_url(cls, contest: ContestId) -> str:
        return cls.build_url("/contests/{}/tasks_print", contest)

    @classmethod
    def build_register_url(cls, contest: ContestId) -> str:
        return cls.build_url("/contests/{}/register", contest)

    @classmethod
    def build_submissions_url(cls, contest: ContestId) -> str:
        return cls.build_url("/contests/{}/submissions/me", contest)

    @classmethod
    def parse_contest_id(cls, url: str) -> ContestId:
        """
        Extract the contest id from a problem URL.
        """
        logger.debug(f"Parsing URL: {url}")

        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise URLParsingError(f"Invalid URL format: {url}")

        if parsed.hostname != cls.DOMAIN:
            raise URLParsingError(f"wrong domain. expected `{cls.DOMAIN}`: {url}")

        match = cls.CONTEST_PATH_PATTERN.match(parsed.path)
        if not match:
            raise URLParsingError(f"Could not extract contest ID of the problem: {url}")

        contest = ContestId(match.group(1))
        logger.debug(f"Parsed URL to contest: {contest}")
        return contest

    @staticmethod
    def screen_name(url: str) -> str:
        """Last path segment of a problem URL."""
        segments = urlparse(url).path.split("/")
        if not segments[-1]:
            raise URLParsingError(f"Empty URL path: {url}")
        return segments[-1]

    @classmethod
    def normalize_url(cls, url: str) -> str:
        """
        Comparable form of a URL.

        Scheme and host are lower-cased, a default port is dropped and the
        fragment is discarded. The path is kept as is.
        """
        parsed = urlparse(url)
        scheme = parsed.scheme.lower()
        try:
            port = parsed.port
        except ValueError as e:
            raise URLParsingError(f"Invalid port: {url}") from e

        netloc = parsed.hostname or ""
        if port is not None and port != cls.DEFAULT_PORTS.get(scheme):
            netloc = f"{netloc}:{port}"
        return urlunparse((scheme, netloc, parsed.path or "/", parsed.params, parsed.query, ""))
