"""Contest window and per-problem contest metadata."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from atcoder_testcases.domain.exceptions import NotBegunError

from .identifiers import ContestId


class ContestState(Enum):
    NOT_BEGUN = "NotBegun"
    ACTIVE = "Active"
    FINISHED = "Finished"


@dataclass(frozen=True)
class ContestStatus:
    """Status of a contest at a given instant.

    Derived from the ``(start, end)`` window every time it is needed; both
    ends of the window count as active.
    """

    state: ContestState
    contest: ContestId
    start: datetime

    @classmethod
    def now(
        cls,
        duration: tuple[datetime, datetime],
        contest: ContestId,
        now: Optional[datetime] = None,
    ) -> "ContestStatus":
        start, end = duration
        now = now or datetime.now(timezone.utc)
        if now < start:
            state = ContestState.NOT_BEGUN
        elif now > end:
            state = ContestState.FINISHED
        else:
            state = ContestState.ACTIVE
        return cls(state=state, contest=contest, start=start)

    def is_finished(self) -> bool:
        return self.state is ContestState.FINISHED

    def raise_if_not_begun(self) -> None:
        if self.state is ContestState.NOT_BEGUN:
            raise NotBegunError(str(self.contest), self.start)


@dataclass(frozen=True)
class ContestMetadata:
    """Contest information attached to each retrieved problem."""

    id: str
    display_name: str
    url: str
    submissions_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "url": self.url,
            "submissions_url": self.submissions_url,
        }
