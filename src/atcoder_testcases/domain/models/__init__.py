"""Domain models package."""

from .contest import ContestMetadata, ContestState, ContestStatus
from .identifiers import ContestId, ProblemIndex
from .outcomes import (
    LoginOutcome,
    ParticipateOutcome,
    RetrievedProblem,
    RetrieveTestCasesOutcome,
    TextFiles,
)
from .targets import ProblemIndexes, ProblemsInContest, ProblemUrls
from .testsuite import (
    BatchTestCase,
    BatchTestSuite,
    FloatMatch,
    InteractiveTestSuite,
    LinesMatch,
    Match,
    TestSuite,
    UnsubmittableTestSuite,
)

__all__ = [
    "BatchTestCase",
    "BatchTestSuite",
    "ContestId",
    "ContestMetadata",
    "ContestState",
    "ContestStatus",
    "FloatMatch",
    "InteractiveTestSuite",
    "LinesMatch",
    "LoginOutcome",
    "Match",
    "ParticipateOutcome",
    "ProblemIndex",
    "ProblemIndexes",
    "ProblemUrls",
    "ProblemsInContest",
    "RetrieveTestCasesOutcome",
    "RetrievedProblem",
    "TestSuite",
    "TextFiles",
    "UnsubmittableTestSuite",
]
