"""Client for the shared Dropbox folder holding the official test cases."""

import json
from dataclasses import dataclass, field
from typing import Union

import httpx
from loguru import logger
from pydantic import ValidationError

from atcoder_testcases.domain.exceptions import StructuralError, UnexpectedStatusError

from .download import DownloadRequest, download_with_progress
from .http_client import AsyncHTTPClient, HTTPClient
from .schemas import DeletedMetadata, FileMetadata, ListFolderResult
from .shell import Shell

SHARED_LINK_URL = "https://www.dropbox.com/sh/arnpe0ef5wds8cv/AAAk_SECQ2Nc6SVGii3rHX6Fa?dl=0"
LIST_FOLDER_URL = "https://api.dropboxapi.com/2/files/list_folder"
LIST_FOLDER_CONTINUE_URL = "https://api.dropboxapi.com/2/files/list_folder/continue"
GET_SHARED_LINK_FILE_URL = "https://content.dropboxapi.com/2/sharing/get_shared_link_file"


@dataclass(frozen=True)
class FileEntry:
    path: str


@dataclass(frozen=True)
class FolderEntry:
    path: str


Entry = Union[FileEntry, FolderEntry]


def last_segment(path: str) -> str:
    return path.split("/")[-1]


def file_stem(path: str) -> str:
    return last_segment(path).split(".")[0]


@dataclass
class Entries:
    """Filtered entries of one folder, in listing order."""

    entries: list[Entry] = field(default_factory=list)

    def file_paths(self) -> list[str]:
        return [entry.path for entry in self.entries if isinstance(entry, FileEntry)]

    def folder_paths(self) -> list[str]:
        return [entry.path for entry in self.entries if isinstance(entry, FolderEntry)]

    def folder_names(self) -> set[str]:
        return {last_segment(path) for path in self.folder_paths()}


class DropboxClient:
    """Lists and downloads files below the shared link."""

    def __init__(self, http_client: HTTPClient, async_client: AsyncHTTPClient, shell: Shell):
        self.http_client = http_client
        self.async_client = async_client
        self.shell = shell

    def list_folder(self, access_token: str, path: str) -> Entries:
        """
        List a folder, following the cursor until the last page.

        Folders named ``etc`` and files that are not ASCII-named text
        files are left out. A deleted entry fails the whole listing.
        """
        result = self._request_page(
            access_token,
            LIST_FOLDER_URL,
            {"shared_link": {"url": SHARED_LINK_URL}, "path": path},
            f"could not retrieve file names in `{path}`",
        )
        metadata = list(result.entries)
        while result.has_more:
            cursor = result.cursor
            result = self._request_page(
                access_token,
                LIST_FOLDER_CONTINUE_URL,
                {"cursor": cursor},
                f"could not retrieve file names at cursor `{cursor}`",
            )
            metadata.extend(result.entries)

        entries = Entries()
        base = path.rstrip("/")
        for item in metadata:
            if not item.is_wanted():
                continue
            if isinstance(item, DeletedMetadata):
                raise StructuralError(f"deleted: {item.name!r}")
            entry_path = f"{base}/{item.name}"
            if isinstance(item, FileMetadata):
                entries.entries.append(FileEntry(entry_path))
            else:
                entries.entries.append(FolderEntry(entry_path))

        logger.debug(f"Listed {len(entries.entries)} entries in {path}")
        return entries

    def _request_page(
        self,
        access_token: str,
        url: str,
        payload: dict,
        context: str,
    ) -> ListFolderResult:
        response = self.http_client.post(url, bearer=access_token, json=payload, check=False)
        if response.status_code != 200:
            raise UnexpectedStatusError(
                url, (200,), response.status_code, detail=f"{context}\n{_pretty(response)}"
            )
        try:
            return ListFolderResult.model_validate_json(response.content)
        except ValidationError as e:
            raise StructuralError(f"{context}: unexpected response") from e

    def retrieve_files(self, access_token: str, file_paths: list[str]) -> dict[str, str]:
        """
        Download files concurrently, keyed by file stem in path order.
        """
        requests = [
            DownloadRequest(
                name=path,
                method="POST",
                url=GET_SHARED_LINK_FILE_URL,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Dropbox-API-Arg": json.dumps({"url": SHARED_LINK_URL, "path": path}),
                },
            )
            for path in file_paths
        ]
        contents = download_with_progress(self.async_client, requests, self.shell.progress_file())
        return {file_stem(path): content for path, content in zip(file_paths, contents)}


def _pretty(response: httpx.Response) -> str:
    try:
        return json.dumps(response.json(), indent=2, ensure_ascii=False)
    except ValueError:
        return response.text
