"""Selections of problems to retrieve."""

from dataclasses import dataclass
from typing import Iterable, Optional, Union


@dataclass(frozen=True)
class ProblemIndexes:
    """Problems of one contest, optionally restricted to some indices."""

    contest: str
    problems: Optional[frozenset[str]] = None

    @classmethod
    def of(cls, contest: str, problems: Optional[Iterable[str]] = None) -> "ProblemIndexes":
        return cls(contest=contest, problems=None if problems is None else frozenset(problems))


@dataclass(frozen=True)
class ProblemUrls:
    """Explicit problem URLs, possibly spanning several contests."""

    urls: frozenset[str]

    @classmethod
    def of(cls, urls: Iterable[str]) -> "ProblemUrls":
        return cls(urls=frozenset(urls))


ProblemsInContest = Union[ProblemIndexes, ProblemUrls]
