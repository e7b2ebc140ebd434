"""System test case retrieval from the archive mirror."""

from typing import Callable, Mapping

from loguru import logger

from atcoder_testcases.domain.exceptions import StructuralError
from atcoder_testcases.domain.models import RetrievedProblem, RetrieveTestCasesOutcome, TextFiles
from atcoder_testcases.infrastructure import DropboxClient, Entries

# prompt -> access token
TokenProvider = Callable[[str], str]


class SystemTestCaseService:
    """Fills ``text_files`` of every problem from the archive."""

    def __init__(self, *, dropbox_client: DropboxClient, path_prefixes: Mapping[str, str]):
        self.dropbox_client = dropbox_client
        self.path_prefixes = path_prefixes

    def path_prefix(self, contest: str) -> str:
        return self.path_prefixes.get(contest, f"/{contest}/")

    def retrieve(self, access_token: TokenProvider, outcome: RetrieveTestCasesOutcome) -> None:
        """
        Download the archive files of each problem into ``outcome``.

        Any unexpected folder layout aborts the whole call.
        """
        token = access_token("Dropbox Access Token: ")
        for problem in outcome.problems:
            self._retrieve_problem(token, problem)

    def _retrieve_problem(self, token: str, problem: RetrievedProblem) -> None:
        if problem.contest is None:
            raise StructuralError(f"no contest is known for `{problem.url}`")

        prefix = self.path_prefix(problem.contest.id)
        problem_dir = f"{prefix}{problem.index}"
        entries = self.dropbox_client.list_folder(token, problem_dir)

        in_paths, out_paths = self._resolve_layout(token, problem_dir, prefix, entries)

        inputs = self.dropbox_client.retrieve_files(token, in_paths)
        outputs = self.dropbox_client.retrieve_files(token, out_paths)
        problem.text_files = {
            stem: TextFiles(input=content, output=outputs.get(stem))
            for stem, content in inputs.items()
        }
        logger.info(
            f"Retrieved {len(problem.text_files)} test case(s) "
            f"of {problem.contest.id} {problem.index}"
        )

    def _resolve_layout(
        self,
        token: str,
        problem_dir: str,
        prefix: str,
        entries: Entries,
    ) -> tuple[list[str], list[str]]:
        folders = entries.folder_names()

        def list_files(name: str) -> list[str]:
            return self.dropbox_client.list_folder(token, f"{problem_dir}/{name}").file_paths()

        if folders == {"in", "out"}:
            return list_files("in"), list_files("out")
        if folders == {"in"}:
            return list_files("in"), []
        if folders == {"out"}:
            return entries.file_paths(), list_files("out")
        if not folders:
            return entries.file_paths(), []
        raise StructuralError(
            f"unexpected format (path-prefix: {prefix!r}, "
            f"files: {entries.file_paths()}, folders: {entries.folder_paths()})"
        )
