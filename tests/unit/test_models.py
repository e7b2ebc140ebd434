"""Unit tests for identifiers, contest status and outcome serialization."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from atcoder_testcases.domain.exceptions import NotBegunError
from atcoder_testcases.domain.models import (
    BatchTestCase,
    BatchTestSuite,
    ContestId,
    ContestMetadata,
    ContestState,
    ContestStatus,
    FloatMatch,
    LoginOutcome,
    ParticipateOutcome,
    ProblemIndex,
    RetrievedProblem,
    RetrieveTestCasesOutcome,
    TextFiles,
)

START = datetime(2024, 1, 6, 12, 0, tzinfo=timezone.utc)
END = START + timedelta(minutes=100)


@pytest.mark.parametrize("raw", ["abc100", "ABC100", "AbC100"])
def test_contest_id_is_lower_case_and_idempotent(raw):
    contest = ContestId(raw)

    assert str(contest) == "abc100"
    assert ContestId(contest) == contest
    assert ContestId(str(contest)) == ContestId("ABC100")


def test_problem_index_is_upper_case():
    assert ProblemIndex("a") == ProblemIndex("A")
    assert str(ProblemIndex("ex")) == "EX"
    assert {ProblemIndex("b"): 1}[ProblemIndex("B")] == 1


@pytest.mark.parametrize(
    "now, expected",
    [
        (START - timedelta(seconds=1), ContestState.NOT_BEGUN),
        (START, ContestState.ACTIVE),
        (START + timedelta(minutes=50), ContestState.ACTIVE),
        (END, ContestState.ACTIVE),
        (END + timedelta(microseconds=1), ContestState.FINISHED),
    ],
)
def test_contest_status_boundaries(now, expected):
    status = ContestStatus.now((START, END), ContestId("abc335"), now=now)

    assert status.state is expected
    assert status.is_finished() == (expected is ContestState.FINISHED)


def test_not_begun_raises_with_start_time():
    status = ContestStatus.now((START, END), ContestId("abc335"), now=START - timedelta(days=1))

    with pytest.raises(NotBegunError) as exc_info:
        status.raise_if_not_begun()

    assert exc_info.value.contest == "abc335"
    assert exc_info.value.start == START
    assert "`abc335` will begin at" in str(exc_info.value)


def test_active_status_does_not_raise():
    ContestStatus.now((START, END), ContestId("abc335"), now=START).raise_if_not_begun()


def test_float_match_rejects_non_positive_errors():
    with pytest.raises(ValueError):
        FloatMatch(relative_error=0.0)
    with pytest.raises(ValueError):
        FloatMatch(absolute_error=-1e-6)


def test_outcome_json():
    assert LoginOutcome.ALREADY_LOGGED_IN.to_json() == '"AlreadyLoggedIn"'
    assert ParticipateOutcome.CONTEST_IS_FINISHED.to_json() == '"ContestIsFinished"'
    assert ParticipateOutcome.SUCCESS.message() == "Successfully participated."


def test_retrieve_outcome_to_json():
    outcome = RetrieveTestCasesOutcome(
        problems=[
            RetrievedProblem(
                contest=ContestMetadata(
                    id="abc100",
                    display_name="AtCoder Beginner Contest 100",
                    url="https://atcoder.jp/contests/abc100",
                    submissions_url="https://atcoder.jp/contests/abc100/submissions/me",
                ),
                index="A",
                url="https://atcoder.jp/contests/abc100/tasks/abc100_a",
                screen_name="abc100_a",
                display_name="Happy Birthday!",
                test_suite=BatchTestSuite(
                    timelimit=timedelta(seconds=2),
                    cases=[BatchTestCase(name="sample1", input="5 4\n", output="Yay!\n")],
                ),
                text_files={"00_sample_01": TextFiles(input="5 4\n", output="Yay!\n")},
            )
        ]
    )

    data = json.loads(outcome.to_json())
    problem = data["problems"][0]

    assert problem["contest"]["id"] == "abc100"
    assert problem["screen_name"] == "abc100_a"
    assert problem["test_suite"]["timelimit_ms"] == 2000
    assert problem["test_suite"]["cases"] == [{"name": "sample1", "in": "5 4\n", "out": "Yay!\n"}]
    assert problem["text_files"] == {"00_sample_01": {"in": "5 4\n", "out": "Yay!\n"}}
