"""Login and contest registration."""

from typing import Callable

from loguru import logger

from atcoder_testcases.domain.models import (
    ContestId,
    ContestStatus,
    LoginOutcome,
    ParticipateOutcome,
)
from atcoder_testcases.domain.parsers import ContestPage, URLParser
from atcoder_testcases.infrastructure import HTTPClient

# (username prompt, password prompt) -> (username, password)
CredentialsProvider = Callable[[str, str], tuple[str, str]]


class AccountService:
    """Drives the login form and the contest registration form."""

    def __init__(self, *, http_client: HTTPClient, url_parser: type[URLParser] = URLParser):
        self.http_client = http_client
        self.url_parser = url_parser

    def check_logged_in(self) -> bool:
        """The settings page answers 200 to a signed-in user and redirects anyone else."""
        response = self.http_client.get(
            self.url_parser.build_url("/settings"), passing=(200,), warning=(302,)
        )
        return response.status_code == 200

    def login(self, credentials: CredentialsProvider) -> LoginOutcome:
        if self.check_logged_in():
            logger.info("Already logged in")
            return LoginOutcome.ALREADY_LOGGED_IN
        self._ensure_login(credentials)
        return LoginOutcome.SUCCESS

    def _ensure_login(self, credentials: CredentialsProvider) -> None:
        """
        Prompt and submit the login form until the session is signed in.

        There is no retry limit. The loop ends when the provider raises.
        """
        login_url = self.url_parser.build_url("/login")
        while True:
            username, password = credentials("Username: ", "Password: ")

            page = ContestPage.parse(self.http_client.get(login_url).text)
            csrf_token = page.extract_csrf_token()

            self.http_client.post(
                login_url,
                passing=(302,),
                data={"csrf_token": csrf_token, "username": username, "password": password},
            )

            if self.check_logged_in():
                logger.info(f"Logged in as {username}")
                return
            logger.warning("Login failed, asking for credentials again")

    def participate(self, credentials: CredentialsProvider, contest: str) -> ParticipateOutcome:
        """Register for a contest on explicit request, even before it starts."""
        return self.participate_if_not(credentials, ContestId(contest), explicit=True)

    def participate_if_not(
        self,
        credentials: CredentialsProvider,
        contest: ContestId,
        explicit: bool,
    ) -> ParticipateOutcome:
        """
        Make sure the user takes part in ``contest``.

        When not ``explicit`` (a page needed registration), a contest that
        has not begun raises ``NotBegunError``.
        """
        contest_url = self.url_parser.build_contest_url(contest)

        response = self.http_client.get(contest_url, passing=(200,), accept=(200, 404))
        page = ContestPage.parse(response.text)

        status = ContestStatus.now(page.extract_contest_duration(), contest)
        logger.debug(f"Contest {contest} is {status.state.value}")
        if not explicit:
            status.raise_if_not_begun()

        self.login(credentials)

        if status.is_finished():
            logger.info(f"Contest {contest} is already finished")
            return ParticipateOutcome.CONTEST_IS_FINISHED

        page = ContestPage.parse(self.http_client.get(contest_url).text)
        if not page.contains_registration_button():
            logger.info(f"Already registered for {contest}")
            return ParticipateOutcome.ALREADY_PARTICIPATED

        csrf_token = page.extract_csrf_token()
        self.http_client.post(
            self.url_parser.build_register_url(contest),
            passing=(302,),
            data={"csrf_token": csrf_token},
        )
        logger.info(f"Registered for {contest}")
        return ParticipateOutcome.SUCCESS
