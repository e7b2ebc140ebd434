"""Facade bundling the services of one authenticated session."""

from typing import Optional

from loguru import logger

from atcoder_testcases.domain.models import (
    LoginOutcome,
    ParticipateOutcome,
    ProblemsInContest,
    RetrieveTestCasesOutcome,
)
from atcoder_testcases.infrastructure import CookieStorage, HTTPClient

from .account import AccountService, CredentialsProvider
from .system_testcases import SystemTestCaseService, TokenProvider
from .testcases import SampleTestCaseService


class Session:
    """Entry point for login, registration and test case retrieval."""

    def __init__(
        self,
        *,
        cookies: CookieStorage,
        http_client: HTTPClient,
        account_service: AccountService,
        sample_service: SampleTestCaseService,
        system_service: SystemTestCaseService,
    ):
        self.cookies = cookies
        self.http_client = http_client
        self.account_service = account_service
        self.sample_service = sample_service
        self.system_service = system_service

    def atcoder_login(self, credentials: CredentialsProvider) -> LoginOutcome:
        return self.account_service.login(credentials)

    def atcoder_participate(
        self,
        credentials: CredentialsProvider,
        contest: str,
    ) -> ParticipateOutcome:
        return self.account_service.participate(credentials, contest)

    def atcoder_retrieve_test_cases(
        self,
        credentials: CredentialsProvider,
        targets: ProblemsInContest,
        access_token: Optional[TokenProvider] = None,
    ) -> RetrieveTestCasesOutcome:
        """
        Scrape the samples and, given an access token provider, add the
        full test data from the archive.
        """
        outcome = self.sample_service.retrieve(credentials, targets)
        if access_token is not None:
            self.system_service.retrieve(access_token, outcome)
        return outcome

    def close(self) -> None:
        self.http_client.close()
        self.cookies.close()
        logger.debug("Session closed")

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
