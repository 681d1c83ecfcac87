"""Capture deletion.

Removes the capture row (its bonus events cascade with it) and moves the
stored original and thumbnail to the recycle bin.
"""

from __future__ import annotations

import os

from loguru import logger
from send2trash import send2trash

from core.services.interfaces import CaptureStore, DeleteResult


def _uri_to_path(uri: str) -> str:
    return uri[len("file://"):] if uri.startswith("file://") else uri


class CaptureDeleteService:
    """Coordinates capture row deletion and file cleanup."""

    def __init__(self, captures: CaptureStore, send_to_trash: bool = True) -> None:
        self._captures = captures
        self._send_to_trash = send_to_trash

    def delete_capture(self, capture_id: int) -> DeleteResult:
        """Delete capture `capture_id` and report per-file results."""
        capture = self._captures.get_capture(capture_id)
        if capture is None:
            logger.warning("Capture {} not found; nothing to delete", capture_id)
            return DeleteResult(capture_id=capture_id, success_paths=[], failed=[])

        self._captures.delete_capture(capture_id)

        success: list[str] = []
        failed: list[tuple[str, str]] = []
        if not self._send_to_trash:
            return DeleteResult(capture_id=capture_id, success_paths=success, failed=failed)

        for uri in dict.fromkeys((capture.original_uri, capture.thumbnail_uri)):
            if not uri:
                continue
            path = os.path.normpath(_uri_to_path(uri))
            if not os.path.exists(path):
                logger.debug("Capture file already gone: {}", path)
                continue
            try:
                send2trash(path)
                success.append(path)
            except OSError as ex:
                logger.error("Failed to trash {}: {}", path, ex)
                failed.append((path, str(ex)))
        return DeleteResult(capture_id=capture_id, success_paths=success, failed=failed)
