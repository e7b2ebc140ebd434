"""Test suite models produced from problem statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional, Union


@dataclass(frozen=True)
class LinesMatch:
    """Exact comparison after trailing-newline normalization."""

    def to_dict(self) -> Any:
        return "Lines"


@dataclass(frozen=True)
class FloatMatch:
    """Numeric comparison with relative and/or absolute tolerance."""

    relative_error: Optional[float] = None
    absolute_error: Optional[float] = None

    def __post_init__(self) -> None:
        for error in (self.relative_error, self.absolute_error):
            if error is not None and not 0 < error < float("inf"):
                raise ValueError(f"error bound must be positive and finite: {error}")

    def to_dict(self) -> Any:
        return {
            "Float": {
                "relative_error": self.relative_error,
                "absolute_error": self.absolute_error,
            }
        }


Match = Union[LinesMatch, FloatMatch]


@dataclass
class BatchTestCase:
    """A named input/output pair."""

    name: Optional[str]
    input: str
    output: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "in": self.input, "out": self.output}


@dataclass
class UnsubmittableTestSuite:
    """Sentinel for problems that are not judged."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": "Unsubmittable"}


@dataclass
class BatchTestSuite:
    timelimit: Optional[timedelta] = None
    match: Match = field(default_factory=LinesMatch)
    cases: list[BatchTestCase] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "Batch",
            "timelimit_ms": _milliseconds(self.timelimit),
            "match": self.match.to_dict(),
            "cases": [case.to_dict() for case in self.cases],
        }


@dataclass
class InteractiveTestSuite:
    timelimit: Optional[timedelta] = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": "Interactive", "timelimit_ms": _milliseconds(self.timelimit)}


TestSuite = Union[UnsubmittableTestSuite, BatchTestSuite, InteractiveTestSuite]


def _milliseconds(timelimit: Optional[timedelta]) -> Optional[int]:
    if timelimit is None:
        return None
    return timelimit // timedelta(milliseconds=1)
