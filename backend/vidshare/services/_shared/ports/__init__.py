"""
Ports (hexagonal interfaces) the service layer depends on.

- :mod:`token_provider`: :class:`~.TokenProvider`, JWT creation and verification.
- :mod:`media_relay`: :class:`~.MediaRelay` and :class:`~.UploadResult`,
  pushing staged files to the media host.

Concrete adapters live under ``vidshare.infra``.
"""

from __future__ import annotations

from .media_relay import MediaRelay, UploadResult
from .token_provider import TokenProvider

__all__ = ["MediaRelay", "TokenProvider", "UploadResult"]
