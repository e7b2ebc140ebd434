"""HTTP, cookie storage, archive API and diagnostics adapters."""

from .cookies import CookieStorage
from .download import DownloadRequest, download_with_progress
from .dropbox_client import DropboxClient, Entries, FileEntry, FolderEntry
from .http_client import AsyncHTTPClient, HTTPClient, build_clients
from .shell import LoguruShell, Shell, StatusCodeColor

__all__ = [
    "AsyncHTTPClient",
    "CookieStorage",
    "DownloadRequest",
    "DropboxClient",
    "Entries",
    "FileEntry",
    "FolderEntry",
    "HTTPClient",
    "LoguruShell",
    "Shell",
    "StatusCodeColor",
    "build_clients",
    "download_with_progress",
]
