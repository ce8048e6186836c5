from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from vidshare.repositories.base import Pagination
from vidshare.services._shared.errors import AuthorizationError, InvalidInputError
from vidshare.services._shared.policies.common import is_owner
from vidshare.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data.

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (blank checks, pagination).
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session; always use a Unit of Work.
    - Services raise :mod:`vidshare.services._shared.errors` types only.
    """

    MAX_PAGE_SIZE = 100

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    @staticmethod
    def require_fields(fields: Mapping[str, str | None], message: str | None = None) -> None:
        """
        Reject inputs that are missing or blank after trimming.

        :param fields: Public field name to raw value.
        :param message: Error message; defaults to naming the first offending field.
        :raises InvalidInputError: If any value is missing or blank.
        """
        for name, value in fields.items():
            if value is None or not str(value).strip():
                raise InvalidInputError(message or f"{name} is required")

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size, capped at :attr:`MAX_PAGE_SIZE`.
        :param sort: Sort tokens like ``["-createdAt", "title"]``.
        :returns: Pagination instance.
        :rtype: Pagination
        """
        page = max(1, int(page))
        limit = min(max(1, int(limit)), self.MAX_PAGE_SIZE)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner.

        :param actor_id: Authenticated user id.
        :param owner_id: Owner user id of the resource.
        :param msg: Optional custom error message.
        :raises AuthorizationError: If actor is not the owner.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You can only modify your own resources.")
