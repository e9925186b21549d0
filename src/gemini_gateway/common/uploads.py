"""Staging of uploaded files under the uploads directory.

Each upload is copied to a uniquely named file, encoded for the provider on
demand and deleted exactly once when the owning request finishes.
"""
from __future__ import annotations
import base64
import logging
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Protocol

from gemini_gateway.common.schema import ContentPart

LOGGER = logging.getLogger("gemini_gateway.uploads")

DEFAULT_MIME_TYPE = "application/octet-stream"

class Upload(Protocol):
    file: BinaryIO
    content_type: str | None


class StagedUpload:
    """A staged upload; use as a context manager to guarantee deletion."""

    def __init__(self, path: Path, mime_type: str) -> None:
        self.path = path
        self.mime_type = mime_type
        self._discarded = False

    def to_content_part(self) -> ContentPart:
        data = base64.b64encode(self.path.read_bytes()).decode("ascii")
        return ContentPart(data=data, mime_type=self.mime_type)

    def discard(self) -> None:
        """Delete the staged file. Errors are logged, never raised."""
        if self._discarded:
            return
        self._discarded = True
        try:
            self.path.unlink()
        except OSError as e:
            LOGGER.error("Error deleting uploaded file %s: %s", self.path, e)

    def __enter__(self) -> "StagedUpload":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.discard()


def stage_upload(upload: Upload, upload_dir: str | Path) -> StagedUpload:
    """
    Copy an uploaded file into the uploads directory.

    Args:
        upload: Object exposing a binary ``file`` and a declared ``content_type``.
        upload_dir: Directory for staged files; created if missing.

    Returns:
        The staged upload. The caller owns it and must discard it.
    """
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / uuid.uuid4().hex
    try:
        with open(path, "wb") as out:
            shutil.copyfileobj(upload.file, out)
    except OSError:
        path.unlink(missing_ok=True)
        raise
    return StagedUpload(path, upload.content_type or DEFAULT_MIME_TYPE)
