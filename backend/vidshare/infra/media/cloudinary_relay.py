"""Media relay pushing staged files to Cloudinary through its Python SDK."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from urllib3.exceptions import HTTPError as TransportError

from vidshare.services._shared.errors import ServiceUnavailableError
from vidshare.services._shared.ports import MediaRelay, UploadResult

log = logging.getLogger(__name__)


def _is_transport_failure(exc: CloudinaryError) -> bool:
    """True when the SDK wrapped a network-level failure (timeout, refused, reset)."""
    cause = exc.__cause__ or exc.__context__
    return isinstance(cause, (TransportError, OSError))


@dataclass(slots=True)
class CloudinaryMediaRelay(MediaRelay):
    """
    Upload local files with ``resource_type="auto"``.

    The resource type is detected by the host, so images and videos share one
    call. Credentials are passed per call rather than through the SDK's global
    config. The local file is removed whatever the outcome.
    """

    cloud_name: str
    api_key: str
    api_secret: str
    timeout: float = 30.0

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> CloudinaryMediaRelay:
        return cls(
            cloud_name=str(config.get("CLOUDINARY_CLOUD_NAME") or ""),
            api_key=str(config.get("CLOUDINARY_API_KEY") or ""),
            api_secret=str(config.get("CLOUDINARY_API_SECRET") or ""),
            timeout=float(config.get("MEDIA_UPLOAD_TIMEOUT", 30)),
        )

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def upload(self, local_path: str | Path | None) -> UploadResult | None:
        """
        Upload ``local_path`` and return the hosted asset, or ``None``.

        :raises ServiceUnavailableError: On timeout or connection failure.
        """
        if not local_path:
            return None
        path = Path(local_path)
        try:
            if not path.is_file():
                return None
            if not self.configured:
                log.warning("media.relay_not_configured")
                return None
            payload = self._send(path)
        finally:
            path.unlink(missing_ok=True)

        if not payload:
            return None
        url = payload.get("secure_url") or payload.get("url")
        if not url:
            return None
        return UploadResult(
            url=str(url),
            public_id=str(payload.get("public_id") or ""),
            duration=float(payload.get("duration") or 0.0),
        )

    def _send(self, path: Path) -> dict[str, Any] | None:
        try:
            return cloudinary.uploader.upload(
                str(path),
                resource_type="auto",
                timeout=self.timeout,
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
            )
        except CloudinaryError as exc:
            if _is_transport_failure(exc):
                log.error("media.upload_unavailable")
                raise ServiceUnavailableError("Media host is unavailable") from exc
            log.warning("media.upload_rejected %s", exc)
            return None
