"""Pydantic schemas for the archive listing API."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ALLOWED_EXTENSIONS = (None, "txt", "in", "out")


def extension(name: str) -> str | None:
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


class _Metadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str


class FileMetadata(_Metadata):
    tag: Literal["file"] = Field(alias=".tag")

    def is_wanted(self) -> bool:
        """Only ASCII-named text files are test data."""
        return self.name.isascii() and extension(self.name) in ALLOWED_EXTENSIONS


class FolderMetadata(_Metadata):
    tag: Literal["folder"] = Field(alias=".tag")

    def is_wanted(self) -> bool:
        return self.name != "etc"


class DeletedMetadata(_Metadata):
    tag: Literal["deleted"] = Field(alias=".tag")

    def is_wanted(self) -> bool:
        return True


Metadata = Annotated[
    Union[FileMetadata, FolderMetadata, DeletedMetadata],
    Field(discriminator="tag"),
]


class ListFolderResult(BaseModel):
    """One page of a folder listing."""

    entries: list[Metadata]
    cursor: str
    has_more: bool
