"""Outcomes returned to callers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .contest import ContestMetadata
from .testsuite import TestSuite


class LoginOutcome(Enum):
    SUCCESS = "Success"
    ALREADY_LOGGED_IN = "AlreadyLoggedIn"

    def to_json(self) -> str:
        return json.dumps(self.value)


class ParticipateOutcome(Enum):
    SUCCESS = "Success"
    ALREADY_PARTICIPATED = "AlreadyParticipated"
    CONTEST_IS_FINISHED = "ContestIsFinished"

    def to_json(self) -> str:
        return json.dumps(self.value)

    def message(self) -> str:
        return _PARTICIPATE_MESSAGES[self]


_PARTICIPATE_MESSAGES = {
    ParticipateOutcome.SUCCESS: "Successfully participated.",
    ParticipateOutcome.ALREADY_PARTICIPATED: "Already participated.",
    ParticipateOutcome.CONTEST_IS_FINISHED: "The contest is already finished.",
}


@dataclass
class TextFiles:
    """Input file and optional expected output from the test case archive."""

    input: str
    output: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"in": self.input, "out": self.output}


@dataclass
class RetrievedProblem:
    """One problem of a retrieval call.

    Everything but ``text_files`` is filled from the contest pages;
    ``text_files`` is filled afterwards from the test case archive.
    """

    contest: Optional[ContestMetadata]
    index: str
    url: str
    screen_name: Optional[str]
    display_name: str
    test_suite: TestSuite
    text_files: dict[str, TextFiles] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "contest": self.contest.to_dict() if self.contest else None,
            "index": self.index,
            "url": self.url,
            "screen_name": self.screen_name,
            "display_name": self.display_name,
            "test_suite": self.test_suite.to_dict(),
            "text_files": {name: files.to_dict() for name, files in self.text_files.items()},
        }


@dataclass
class RetrieveTestCasesOutcome:
    problems: list[RetrievedProblem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"problems": [problem.to_dict() for problem in self.problems]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)
