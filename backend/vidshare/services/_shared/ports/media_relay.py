from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True, slots=True)
class UploadResult:
    """
    Outcome of a successful media upload.

    :param url: Canonical (https) URL of the stored asset.
    :param public_id: Identifier of the asset at the media host.
    :param duration: Media duration in seconds, ``0.0`` for images or when unknown.
    """

    url: str
    public_id: str = ""
    duration: float = 0.0


class MediaRelay(Protocol):
    """Port for pushing a locally staged file to the media host.

    ``upload`` returns ``None`` when no usable result was obtained and always
    removes ``local_path`` afterwards. Timeouts raise
    :class:`~vidshare.services._shared.errors.ServiceUnavailableError`.
    """

    def upload(self, local_path: str | Path | None) -> UploadResult | None: ...
