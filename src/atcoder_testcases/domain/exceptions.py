"""Domain exceptions."""

from datetime import datetime
from typing import Iterable, Optional


class AtCoderError(Exception):
    """Base exception for the scraper."""

    pass


class ConfigurationError(AtCoderError):
    """Invalid configuration value."""

    pass


class TransportError(AtCoderError):
    """Connection, TLS or timeout failure while talking to a remote host."""

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url} failed: {reason}")


class UnexpectedStatusError(AtCoderError):
    """Response status outside the accepted set for the call."""

    def __init__(
        self,
        url: str,
        expected: Iterable[int],
        actual: int,
        detail: Optional[str] = None,
    ):
        self.url = url
        self.expected = tuple(expected)
        self.actual = actual
        self.detail = detail
        message = f"expected {list(self.expected)}, got {actual} ({url})"
        if detail:
            message = f"{detail}: {message}"
        super().__init__(message)


class ExtractionError(AtCoderError):
    """A required element is missing from a page."""

    pass


class BlockExtractionWarning(AtCoderError):
    """A single problem block on the printable page could not be resolved.

    Never raised out of the extraction engine. It is carried in the results
    and reported as a warning while the remaining blocks are processed.
    """

    pass


class StructuralError(AtCoderError):
    """The test case archive has an unexpected layout."""

    pass


class EncodingError(AtCoderError):
    """Downloaded content is not valid UTF-8."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"invalid UTF-8 content: {path}")


class NotBegunError(AtCoderError):
    """Implicit participation attempted before the contest opens."""

    def __init__(self, contest: str, start: datetime):
        self.contest = contest
        self.start = start
        super().__init__(f"`{contest}` will begin at {start.astimezone()}")


class URLParsingError(ValueError):
    """Invalid URL format or unable to parse URL."""

    pass


class ProblemNotFoundError(AtCoderError):
    """Requested problem indices are not in the contest's task list."""

    def __init__(self, contest: str, indexes: Iterable[str]):
        self.contest = contest
        self.indexes = sorted(indexes)
        super().__init__(f"No such problems in `{contest}`: {self.indexes}")


class CookieStorageError(AtCoderError):
    """The cookie file cannot be read, locked or written."""

    pass
