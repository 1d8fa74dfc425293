"""Uploads resource: media files stored by the backend's image host."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .._types import Envelope, UploadedFile

if TYPE_CHECKING:
    from .._http import FileInput, HTTPClient


class Uploads:
    """client.uploads: upload and delete media.

    File size is not checked here; the server decides what is too large.
    """

    def __init__(self, http: HTTPClient):
        self._http = http

    def upload(self, file: FileInput, *, folder: str = "general") -> Envelope[UploadedFile]:
        """Upload a single file into ``folder``."""
        return Envelope.from_dict(self._http.upload_file(file, folder), UploadedFile.from_dict)

    def upload_many(
        self, files: Iterable[FileInput], *, folder: str = "general"
    ) -> Envelope[list[UploadedFile]]:
        return Envelope.from_dict(self._http.upload_files(files, folder), UploadedFile.from_dict)

    def delete(self, public_id: str) -> Envelope[None]:
        """Delete by public id; slashes in folder-qualified ids are encoded."""
        return Envelope.from_dict(self._http.delete_file(public_id))
