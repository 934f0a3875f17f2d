"""Controller outcomes.

Every controller operation returns exactly one of ``Ok``, ``NotFound`` or
``Created``; the HTTP layer decides how each is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from apps.api.exceptions import NotFoundError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Created(Generic[T]):
    location: str
    payload: T


@dataclass(frozen=True)
class NotFound:
    resource: str
    id: Any

    def to_error(self) -> NotFoundError:
        return NotFoundError(self.resource, self.id)


Outcome = Union[Ok[T], Created[T], NotFound]
