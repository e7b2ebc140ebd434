"""Settings read from the environment, and logging setup."""

import json
import os
import sys
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from atcoder_testcases.domain.exceptions import ConfigurationError

DEFAULT_COOKIES_PATH = Path("~/.local/share/atcoder-testcases/cookies.jsonl")
DEFAULT_USER_AGENT = (
    "atcoder-testcase-scraper (+https://github.com/atcoder-testcases/atcoder-testcase-scraper)"
)
DEFAULT_TIMEOUT = 60.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    cookies_path: Path
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL
    dropbox_path_prefixes_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``ATCODER_*`` variables, reading ``.env`` first."""
        load_dotenv()

        raw_timeout = os.getenv("ATCODER_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigurationError(
                    f"ATCODER_TIMEOUT must be a number: {raw_timeout!r}"
                ) from e
            if timeout <= 0:
                raise ConfigurationError(f"ATCODER_TIMEOUT must be positive: {raw_timeout!r}")

        prefixes_file = os.getenv("ATCODER_DROPBOX_PATH_PREFIXES")
        cookies_path = os.getenv("ATCODER_COOKIES_PATH") or DEFAULT_COOKIES_PATH
        return cls(
            cookies_path=Path(cookies_path).expanduser(),
            timeout=timeout,
            user_agent=os.getenv("ATCODER_USER_AGENT") or DEFAULT_USER_AGENT,
            log_level=(os.getenv("ATCODER_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            dropbox_path_prefixes_file=Path(prefixes_file).expanduser() if prefixes_file else None,
        )


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level)


def load_dropbox_path_prefixes(override: Optional[Path] = None) -> dict[str, str]:
    """
    Contest id -> archive folder prefix.

    Packaged entries come first; entries of ``override`` replace them.
    """
    packaged = resources.files("atcoder_testcases").joinpath("assets/dropbox_path_prefixes.json")
    prefixes = _parse_prefixes(packaged.read_text(encoding="utf-8"), "packaged prefixes")

    if override is not None:
        try:
            text = override.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"could not read `{override}`") from e
        prefixes.update(_parse_prefixes(text, str(override)))

    logger.debug(f"Loaded {len(prefixes)} archive path prefix(es)")
    return prefixes


def _parse_prefixes(text: str, source: str) -> dict[str, str]:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ConfigurationError(f"invalid JSON in {source}") from e
    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigurationError(f"{source} must map contest ids to path prefixes")
    return data
