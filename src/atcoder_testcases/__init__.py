"""Login, contest registration and test case retrieval for AtCoder."""

from atcoder_testcases.config import Settings, setup_logging
from atcoder_testcases.domain.models import (
    LoginOutcome,
    ParticipateOutcome,
    ProblemIndexes,
    ProblemUrls,
    RetrieveTestCasesOutcome,
)
from atcoder_testcases.infrastructure import LoguruShell
from atcoder_testcases.services import Session, create_session

__all__ = [
    "LoginOutcome",
    "LoguruShell",
    "ParticipateOutcome",
    "ProblemIndexes",
    "ProblemUrls",
    "RetrieveTestCasesOutcome",
    "Session",
    "Settings",
    "create_session",
    "setup_logging",
]
