"""Cookie jar persisted as line-delimited JSON."""

import json
import os
import threading
from http.cookiejar import Cookie, CookieJar
from pathlib import Path
from typing import Any, Optional, TextIO

from filelock import FileLock, Timeout
from loguru import logger

from atcoder_testcases.domain.exceptions import CookieStorageError

_NONSTANDARD_ATTRS = ("HttpOnly", "SameSite")


class CookieStorage(CookieJar):
    """Cookie jar shared by the blocking and the async HTTP clients.

    The file is read once on construction (a missing file means an empty
    jar). Whenever a response sets cookies the whole file is rewritten
    under an in-process mutex. The first write takes an exclusive
    cross-process lock that is held until ``close()``.
    """

    def __init__(self, path: Path):
        super().__init__()
        self.path = Path(path)
        self._write_lock = threading.Lock()
        self._process_lock: Optional[FileLock] = None
        self._file: Optional[TextIO] = None

        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with self.path.open(encoding="utf-8") as f:
                for line in f:
                    if line.strip():
                        self.set_cookie(_cookie_from_dict(json.loads(line)))
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise CookieStorageError(f"could not load cookies from `{self.path}`") from e
        logger.debug(f"Loaded {len(self)} cookie(s) from {self.path}")

    def extract_cookies(self, response: Any, request: Any) -> None:
        if not response.info().get_all("Set-Cookie"):
            return
        with self._write_lock:
            super().extract_cookies(response, request)
            self._overwrite()

    def _overwrite(self) -> None:
        file = self._file or self._open_locked()
        cookies = [
            _cookie_to_dict(cookie)
            for cookie in self
            if not (cookie.discard or cookie.is_expired())
        ]
        try:
            file.seek(0)
            file.truncate()
            for cookie in cookies:
                file.write(json.dumps(cookie, ensure_ascii=False) + "\n")
            file.flush()
            os.fsync(file.fileno())
        except OSError as e:
            raise CookieStorageError(f"could not write `{self.path}`") from e

    def _open_locked(self) -> TextIO:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CookieStorageError(f"could not create `{self.path.parent}`") from e

        lock = FileLock(f"{self.path}.lock")
        try:
            lock.acquire(timeout=0)
        except Timeout as e:
            raise CookieStorageError(f"could not lock `{self.path}`") from e

        try:
            self._file = self.path.open("w", encoding="utf-8")
        except OSError as e:
            lock.release()
            raise CookieStorageError(f"could not open `{self.path}`") from e

        self._process_lock = lock
        return self._file

    def close(self) -> None:
        with self._write_lock:
            if self._file is not None:
                self._file.close()
                self._file = None
            if self._process_lock is not None:
                self._process_lock.release()
                self._process_lock = None


def _cookie_to_dict(cookie: Cookie) -> dict[str, Any]:
    return {
        "version": cookie.version,
        "name": cookie.name,
        "value": cookie.value,
        "port": cookie.port,
        "port_specified": cookie.port_specified,
        "domain": cookie.domain,
        "domain_specified": cookie.domain_specified,
        "domain_initial_dot": cookie.domain_initial_dot,
        "path": cookie.path,
        "path_specified": cookie.path_specified,
        "secure": cookie.secure,
        "expires": cookie.expires,
        "discard": cookie.discard,
        "rest": {
            attr: cookie.get_nonstandard_attr(attr)
            for attr in _NONSTANDARD_ATTRS
            if cookie.has_nonstandard_attr(attr)
        },
    }


def _cookie_from_dict(data: dict[str, Any]) -> Cookie:
    return Cookie(
        version=data.get("version", 0),
        name=data["name"],
        value=data["value"],
        port=data.get("port"),
        port_specified=data.get("port_specified", False),
        domain=data["domain"],
        domain_specified=data.get("domain_specified", False),
        domain_initial_dot=data.get("domain_initial_dot", False),
        path=data.get("path", "/"),
        path_specified=data.get("path_specified", True),
        secure=data.get("secure", False),
        expires=data.get("expires"),
        discard=data.get("discard", False),
        comment=None,
        comment_url=None,
        rest=data.get("rest", {}),
    )
