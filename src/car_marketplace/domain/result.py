"""Uniform result type returned by every marketplace use case.

Three outcomes are distinguished:

- SUCCESS: the request was served (possibly with fallback data).
- SOFT_FAILURE: an expected condition the caller renders inline
  (e.g. "Car not found"). Serialized as ``{"success": false, "error": ...}``.
- FATAL_FAILURE: the request cannot be served at all. The carried
  DomainError is raised at the protocol boundary.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from car_marketplace.domain.errors import DomainError, InternalError

T = TypeVar("T")


class Outcome(str, enum.Enum):
    SUCCESS = "success"
    SOFT_FAILURE = "soft_failure"
    FATAL_FAILURE = "fatal_failure"


@dataclass(frozen=True, slots=True)
class Pagination:
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def empty(cls, page: int, limit: int) -> Pagination:
        return cls(total=0, page=page, limit=limit, pages=0)


@dataclass(frozen=True, slots=True)
class ActionResult(Generic[T]):
    outcome: Outcome
    data: T | None = None
    pagination: Pagination | None = None
    error: str | None = None
    exception: DomainError | None = None

    @classmethod
    def ok(cls, data: T, pagination: Pagination | None = None) -> ActionResult[T]:
        return cls(outcome=Outcome.SUCCESS, data=data, pagination=pagination)

    @classmethod
    def soft_failure(cls, message: str) -> ActionResult[T]:
        return cls(outcome=Outcome.SOFT_FAILURE, error=message)

    @classmethod
    def fatal(cls, exception: DomainError) -> ActionResult[T]:
        return cls(outcome=Outcome.FATAL_FAILURE, error=exception.message, exception=exception)

    @property
    def succeeded(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def raise_if_fatal(self) -> None:
        if self.outcome is not Outcome.FATAL_FAILURE:
            return
        if self.exception is not None:
            raise self.exception
        raise InternalError(self.error or "Unexpected failure")

    def to_envelope(self, payload: Any = None) -> dict[str, Any]:
        """
        Build the response envelope.

        Args:
            payload: Serialized form of ``data``; defaults to ``data`` itself

        Raises:
            DomainError: If the outcome is fatal
        """
        self.raise_if_fatal()

        if self.outcome is Outcome.SOFT_FAILURE:
            return {"success": False, "error": self.error}

        envelope: dict[str, Any] = {
            "success": True,
            "data": self.data if payload is None else payload,
        }
        if self.pagination is not None:
            envelope["pagination"] = {
                "total": self.pagination.total,
                "page": self.pagination.page,
                "limit": self.pagination.limit,
                "pages": self.pagination.pages,
            }
        return envelope
