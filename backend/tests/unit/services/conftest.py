"""Shared fixtures for service-layer tests."""

from __future__ import annotations

import pytest

from vidshare.core.extensions import get_token_provider


@pytest.fixture()
def token_provider(session):
    """Return the application's JWT provider (the app context is held by ``db``)."""
    return get_token_provider()


@pytest.fixture()
def staged(tmp_path):
    """Return a helper writing a small file into ``tmp_path``."""

    def _make(name: str, content: bytes = b"payload"):
        path = tmp_path / name
        path.write_bytes(content)
        return path

    return _make
