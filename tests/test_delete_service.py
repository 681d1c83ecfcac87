"""Tests for infrastructure/delete_service.py."""

import pytest

from infrastructure import delete_service
from infrastructure.delete_service import CaptureDeleteService


@pytest.fixture
def trashed(monkeypatch):
    moved = []

    def fake_send2trash(path):
        if path.endswith("locked.jpg"):
            raise PermissionError("locked")
        moved.append(path)

    monkeypatch.setattr(delete_service, "send2trash", fake_send2trash)
    return moved


def _capture_with_files(captures, tmp_path, original="orig.jpg", thumb="thumb.jpg"):
    orig_path = tmp_path / original
    thumb_path = tmp_path / thumb
    orig_path.write_bytes(b"jpeg")
    thumb_path.write_bytes(b"jpeg")
    cid = captures.insert_capture(
        item_id="llama",
        title="Llama",
        original_uri=f"file://{orig_path}",
        thumbnail_uri=str(thumb_path),
        created_at=1000,
    )
    return cid, str(orig_path), str(thumb_path)


class TestCaptureDeleteService:
    def test_deletes_row_bonuses_and_files(self, captures, ledger, tmp_path, trashed):
        cid, orig, thumb = _capture_with_files(captures, tmp_path)
        ledger.append(cid, "jungle", "Jungle", 2.0, 10, 1000)

        result = CaptureDeleteService(captures).delete_capture(cid)

        assert not captures.capture_exists(cid)
        assert ledger.list_all() == []
        assert result.capture_id == cid
        assert sorted(result.success_paths) == sorted([orig, thumb])
        assert result.failed == []
        assert sorted(trashed) == sorted([orig, thumb])

    def test_missing_files_are_skipped(self, captures, trashed):
        cid = captures.insert_capture("llama", "Llama", "/nowhere/a.jpg", "/nowhere/b.jpg", 1000)
        result = CaptureDeleteService(captures).delete_capture(cid)
        assert not captures.capture_exists(cid)
        assert result.success_paths == []
        assert trashed == []

    def test_trash_failure_reported(self, captures, tmp_path, trashed):
        cid, _, thumb = _capture_with_files(captures, tmp_path, original="locked.jpg")
        result = CaptureDeleteService(captures).delete_capture(cid)
        assert result.success_paths == [thumb]
        assert len(result.failed) == 1
        assert result.failed[0][0].endswith("locked.jpg")
        assert not captures.capture_exists(cid)

    def test_keep_files_when_trash_disabled(self, captures, tmp_path, trashed):
        cid, _, _ = _capture_with_files(captures, tmp_path)
        result = CaptureDeleteService(captures, send_to_trash=False).delete_capture(cid)
        assert not captures.capture_exists(cid)
        assert result.success_paths == []
        assert trashed == []

    def test_unknown_capture(self, captures, trashed):
        result = CaptureDeleteService(captures).delete_capture(123)
        assert result.success_paths == []
        assert result.failed == []
