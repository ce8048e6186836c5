"""In-process media relay double."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from vidshare.services._shared.ports import MediaRelay, UploadResult


class FakeMediaRelay(MediaRelay):
    """Record uploads and return deterministic URLs.

    Like the real relay it removes the local file after each call. Set
    ``fail`` to make every upload return ``None``; set ``duration`` to control
    the reported media length. ``on_upload`` is called with each path before
    the upload is recorded.
    """

    def __init__(self, *, fail: bool = False, duration: float = 12.5) -> None:
        self.fail = fail
        self.duration = duration
        self.uploaded: list[str] = []
        self.on_upload: Callable[[Path], None] | None = None

    def upload(self, local_path: str | Path | None) -> UploadResult | None:
        if not local_path:
            return None
        path = Path(local_path)
        try:
            if self.fail or not path.is_file():
                return None
            if self.on_upload is not None:
                self.on_upload(path)
            self.uploaded.append(path.name)
            return UploadResult(
                url=f"https://media.test/{path.name}",
                public_id=path.stem,
                duration=self.duration,
            )
        finally:
            path.unlink(missing_ok=True)
