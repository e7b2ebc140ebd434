"""Diagnostics sink for requests, responses, warnings and download progress."""

import sys
from enum import Enum
from typing import Collection, Optional, Protocol, TextIO

from loguru import logger


class StatusCodeColor(Enum):
    PASS = "pass"
    WARNING = "warning"
    ERROR = "error"
    UNKNOWN = "unknown"

    @classmethod
    def classify(
        cls,
        status_code: int,
        passing: Collection[int] = (),
        warning: Collection[int] = (),
        error: Optional[Collection[int]] = None,
    ) -> "StatusCodeColor":
        """
        Classify a status code. ``error=None`` means every other status.
        """
        if status_code in passing:
            return cls.PASS
        if status_code in warning:
            return cls.WARNING
        if error is None or status_code in error:
            return cls.ERROR
        return cls.UNKNOWN


class Shell(Protocol):
    """Protocol for the diagnostics sink."""

    def progress_file(self) -> Optional[TextIO]:
        """Stream for progress bars, or None to hide them."""
        ...

    def warn(self, message: object) -> None:
        ...

    def on_request(self, method: str, url: str) -> None:
        ...

    def on_response(self, status_code: int, color: StatusCodeColor) -> None:
        ...


_STATUS_MARKUP = {
    StatusCodeColor.PASS: "<green><bold>{}</bold></green>",
    StatusCodeColor.WARNING: "<yellow><bold>{}</bold></yellow>",
    StatusCodeColor.ERROR: "<red><bold>{}</bold></red>",
    StatusCodeColor.UNKNOWN: "<bold>{}</bold>",
}


class LoguruShell:
    """Shell that reports through loguru and draws progress on stderr."""

    def __init__(self, show_progress: bool = True):
        self.show_progress = show_progress

    def progress_file(self) -> Optional[TextIO]:
        return sys.stderr if self.show_progress else None

    def warn(self, message: object) -> None:
        logger.warning(str(message))

    def on_request(self, method: str, url: str) -> None:
        logger.opt(colors=True).info(f"<bold>{method}</bold> <cyan>{_escape(url)}</cyan> ...")

    def on_response(self, status_code: int, color: StatusCodeColor) -> None:
        logger.opt(colors=True).info(_STATUS_MARKUP[color].format(status_code))


def _escape(text: str) -> str:
    return text.replace("<", r"\<")
