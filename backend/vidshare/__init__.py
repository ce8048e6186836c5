"""VidShare backend: video sharing REST API on Flask."""

from __future__ import annotations

from vidshare.factory import create_app

__all__ = ["create_app"]
