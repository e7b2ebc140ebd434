"""Value objects for contest and problem identification."""

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class ContestId:
    """Contest identifier, compared case-insensitively (stored lower-case)."""

    value: str

    def __init__(self, value: "str | ContestId") -> None:
        object.__setattr__(self, "value", str(value).lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class ProblemIndex:
    """Problem index within a contest (stored upper-case)."""

    value: str

    def __init__(self, value: "str | ProblemIndex") -> None:
        object.__setattr__(self, "value", str(value).upper())

    def __str__(self) -> str:
        return self.value
