"""Sample test case retrieval from the contest pages."""

from dataclasses import dataclass

from loguru import logger

from atcoder_testcases.domain.exceptions import BlockExtractionWarning, ProblemNotFoundError
from atcoder_testcases.domain.models import (
    ContestId,
    ContestMetadata,
    ProblemIndex,
    ProblemIndexes,
    ProblemsInContest,
    ProblemUrls,
    RetrievedProblem,
    RetrieveTestCasesOutcome,
)
from atcoder_testcases.domain.parsers import ContestPage, TasksPrintParser, URLParser
from atcoder_testcases.infrastructure import HTTPClient, Shell

from .account import AccountService, CredentialsProvider


@dataclass
class ContestTasks:
    """Task list of one contest, narrowed to the requested problems."""

    display_name: str
    index_url_pairs: dict[ProblemIndex, str]


class SampleTestCaseService:
    """Builds a retrieval outcome from the task list and printable pages."""

    TITLE_PREFIX = "Tasks - "

    def __init__(
        self,
        *,
        http_client: HTTPClient,
        account_service: AccountService,
        shell: Shell,
        url_parser: type[URLParser] = URLParser,
    ):
        self.http_client = http_client
        self.account_service = account_service
        self.shell = shell
        self.url_parser = url_parser

    def retrieve(
        self,
        credentials: CredentialsProvider,
        targets: ProblemsInContest,
    ) -> RetrieveTestCasesOutcome:
        if isinstance(targets, ProblemIndexes):
            contests = self._tasks_by_indexes(credentials, targets)
        elif isinstance(targets, ProblemUrls):
            contests = self._tasks_by_urls(credentials, targets)
        else:
            raise TypeError(f"unsupported targets: {targets!r}")

        outcome = RetrieveTestCasesOutcome()
        for contest, tasks in contests.items():
            outcome.problems.extend(self._extract_contest(contest, tasks))

        logger.info(f"Retrieved samples of {len(outcome.problems)} problem(s)")
        return outcome

    def _tasks_by_indexes(
        self,
        credentials: CredentialsProvider,
        targets: ProblemIndexes,
    ) -> dict[ContestId, ContestTasks]:
        contest = ContestId(targets.contest)
        page = self.retrieve_tasks_page(credentials, contest)
        display_name = self._display_name(page)
        index_url_pairs = page.extract_task_indexes_and_urls()

        if targets.problems is not None:
            only = {ProblemIndex(problem) for problem in targets.problems}
            missing = only.difference(index_url_pairs)
            if missing:
                raise ProblemNotFoundError(str(contest), (str(index) for index in missing))
            index_url_pairs = {
                index: url for index, url in index_url_pairs.items() if index in only
            }

        return {contest: ContestTasks(display_name, index_url_pairs)}

    def _tasks_by_urls(
        self,
        credentials: CredentialsProvider,
        targets: ProblemUrls,
    ) -> dict[ContestId, ContestTasks]:
        requested: dict[ContestId, dict[str, str]] = {}
        for url in sorted(targets.urls):
            contest = self.url_parser.parse_contest_id(url)
            requested.setdefault(contest, {})[self.url_parser.normalize_url(url)] = url

        contests: dict[ContestId, ContestTasks] = {}
        for contest in sorted(requested):
            page = self.retrieve_tasks_page(credentials, contest)
            wanted = requested[contest]
            index_url_pairs = {}
            for index, url in page.extract_task_indexes_and_urls().items():
                if wanted.pop(self.url_parser.normalize_url(url), None) is not None:
                    index_url_pairs[index] = url
            for url in wanted.values():
                self.shell.warn(f"could not find `{url}` in `tasks`")
            contests[contest] = ContestTasks(
                display_name=self._display_name(page),
                index_url_pairs=index_url_pairs,
            )
        return contests

    def retrieve_tasks_page(
        self, credentials: CredentialsProvider, contest: ContestId
    ) -> ContestPage:
        """
        Fetch the task list, registering first when it is hidden (404).
        """
        url = self.url_parser.build_tasks_url(contest)
        response = self.http_client.get(url, passing=(200,), warning=(404,))
        if response.status_code == 200:
            return ContestPage.parse(response.text)

        logger.debug(f"Task list of {contest} is hidden, trying to participate")
        self.account_service.participate_if_not(credentials, contest, explicit=False)
        return ContestPage.parse(self.http_client.get(url).text)

    def _display_name(self, page: ContestPage) -> str:
        title = page.extract_title()
        if title.startswith(self.TITLE_PREFIX):
            return title[len(self.TITLE_PREFIX):]
        return title

    def _extract_contest(self, contest: ContestId, tasks: ContestTasks) -> list[RetrievedProblem]:
        """
        Pair the printable page's blocks with the task list.

        Blocks not in the task list are skipped; tasks without a block are
        reported as warnings.
        """
        html = self.http_client.get(self.url_parser.build_tasks_print_url(contest)).text
        results = TasksPrintParser.parse(html).extract_tasks()

        index_url_pairs = dict(tasks.index_url_pairs)
        if len(index_url_pairs) > len(results):
            self.shell.warn(
                f"Found {len(index_url_pairs)} task(s) in `tasks`, "
                f"{len(results)} task(s) in `tasks_print`"
            )

        metadata = ContestMetadata(
            id=str(contest),
            display_name=tasks.display_name,
            url=self.url_parser.build_contest_url(contest),
            submissions_url=self.url_parser.build_submissions_url(contest),
        )

        problems: list[RetrievedProblem] = []
        for result in results:
            if isinstance(result, BlockExtractionWarning):
                self.shell.warn(result)
                continue

            url = index_url_pairs.pop(ProblemIndex(result.index), None)
            if url is None:
                continue
            if result.warning is not None:
                self.shell.warn(result.warning)

            problems.append(
                RetrievedProblem(
                    contest=metadata,
                    index=result.index,
                    url=url,
                    screen_name=self.url_parser.screen_name(url),
                    display_name=result.display_name,
                    test_suite=result.test_suite,
                )
            )

        for index in index_url_pairs:
            self.shell.warn(f"could not find `{index}` in `tasks_print`")
        return problems
