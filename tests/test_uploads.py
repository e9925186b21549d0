from __future__ import annotations

import base64
import io
from pathlib import Path

import pytest

from gemini_gateway.common.uploads import StagedUpload, stage_upload


class _FakeUpload:
    def __init__(self, data: bytes, content_type: str | None) -> None:
        self.file = io.BytesIO(data)
        self.content_type = content_type


def test_stage_upload_copies_into_upload_dir(tmp_path: Path) -> None:
    upload_dir = tmp_path / "uploads"
    staged = stage_upload(_FakeUpload(b"abc", "image/jpeg"), upload_dir)
    assert staged.path.parent == upload_dir
    assert staged.path.read_bytes() == b"abc"
    assert staged.mime_type == "image/jpeg"
    staged.discard()


def test_stage_upload_defaults_mime_type(tmp_path: Path) -> None:
    with stage_upload(_FakeUpload(b"abc", None), tmp_path) as staged:
        assert staged.mime_type == "application/octet-stream"


def test_content_part_is_base64(tmp_path: Path) -> None:
    with stage_upload(_FakeUpload(b"\x00\xffdata", "audio/wav"), tmp_path) as staged:
        part = staged.to_content_part()
    assert part.data == base64.b64encode(b"\x00\xffdata").decode("ascii")
    assert part.to_payload() == {"inlineData": {"mimeType": "audio/wav", "data": part.data}}


def test_staged_file_removed_when_block_raises(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        with stage_upload(_FakeUpload(b"abc", "text/plain"), tmp_path) as staged:
            path = staged.path
            raise RuntimeError("provider down")
    assert not path.exists()
    assert list(tmp_path.iterdir()) == []


def test_discard_is_idempotent_and_never_raises(tmp_path: Path) -> None:
    staged = StagedUpload(tmp_path / "missing", "text/plain")
    staged.discard()
    staged.discard()
