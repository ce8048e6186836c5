from __future__ import annotations

from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for issuing and verifying the two token classes.

    Verification failures (bad signature, expiry, wrong token class) raise
    :class:`~vidshare.services._shared.errors.UnauthorizedError`.
    """

    def create_access_token(
        self, *, identity: int | str, additional_claims: dict[str, Any] | None = None
    ) -> str: ...

    def create_refresh_token(self, *, identity: int | str) -> str: ...

    def decode_access(self, token: str) -> dict[str, Any]: ...

    def decode_refresh(self, token: str) -> dict[str, Any]: ...
