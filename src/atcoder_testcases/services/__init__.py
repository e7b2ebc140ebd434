from typing import Optional

import httpx

from atcoder_testcases.config import Settings, load_dropbox_path_prefixes
from atcoder_testcases.infrastructure import Shell

from .account import AccountService, CredentialsProvider
from .session import Session
from .system_testcases import SystemTestCaseService, TokenProvider
from .testcases import SampleTestCaseService


def create_session(
    settings: Settings,
    shell: Shell,
    transport: Optional[httpx.BaseTransport] = None,
) -> Session:
    """Factory function to create a session with all dependencies."""
    from atcoder_testcases.domain.parsers import URLParser
    from atcoder_testcases.infrastructure import CookieStorage, DropboxClient, build_clients

    cookies = CookieStorage(settings.cookies_path)
    http_client, async_client = build_clients(
        cookies,
        shell,
        user_agent=settings.user_agent,
        timeout=settings.timeout,
        transport=transport,
    )

    account_service = AccountService(http_client=http_client, url_parser=URLParser)
    return Session(
        cookies=cookies,
        http_client=http_client,
        account_service=account_service,
        sample_service=SampleTestCaseService(
            http_client=http_client,
            account_service=account_service,
            shell=shell,
            url_parser=URLParser,
        ),
        system_service=SystemTestCaseService(
            dropbox_client=DropboxClient(http_client, async_client, shell),
            path_prefixes=load_dropbox_path_prefixes(settings.dropbox_path_prefixes_file),
        ),
    )


__all__ = [
    "AccountService",
    "CredentialsProvider",
    "SampleTestCaseService",
    "Session",
    "SystemTestCaseService",
    "TokenProvider",
    "create_session",
]
