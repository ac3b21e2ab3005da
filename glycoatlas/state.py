"""Per-slot request lifecycle: idle -> loading -> success | error.

Each slot hands out a generation token when a request starts. A result is
only applied if its token is still the slot's current one, so a newer
request always wins over an older one that happens to finish later.
"""

import logging
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

log = logging.getLogger(__name__)

T = TypeVar("T")


class Status(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class RequestState(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True)

    status: Status = Status.IDLE
    data: T | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "RequestState[T]":
        if self.status is Status.SUCCESS:
            if self.data is None or self.error is not None:
                raise ValueError("success state requires data and no error")
        elif self.status is Status.ERROR:
            if self.data is not None or not self.error:
                raise ValueError("error state requires an error message and no data")
        elif self.data is not None or self.error is not None:
            raise ValueError(f"{self.status.value} state carries neither data nor error")
        return self

    @classmethod
    def idle(cls) -> "RequestState[T]":
        return cls(status=Status.IDLE)

    @classmethod
    def loading(cls) -> "RequestState[T]":
        return cls(status=Status.LOADING)

    @classmethod
    def succeeded(cls, data: T) -> "RequestState[T]":
        return cls(status=Status.SUCCESS, data=data)

    @classmethod
    def failed(cls, message: str) -> "RequestState[T]":
        return cls(status=Status.ERROR, error=message)

    @property
    def is_success(self) -> bool:
        return self.status is Status.SUCCESS


class Slot(Generic[T]):
    """One independently tracked request lifecycle (e.g. search or report)."""

    def __init__(self, name: str):
        self.name = name
        self._state: RequestState[T] = RequestState.idle()
        self._token = 0

    @property
    def state(self) -> RequestState[T]:
        return self._state

    def start(self) -> int:
        """Move to loading and return the token the caller must present on completion."""
        self._token += 1
        self._state = RequestState.loading()
        log.debug("Slot %s: start (token %d)", self.name, self._token)
        return self._token

    def reset(self) -> None:
        """Back to idle. Any request still in flight becomes stale."""
        self._token += 1
        self._state = RequestState.idle()

    def is_current(self, token: int) -> bool:
        return token == self._token

    def resolve(self, token: int, data: T) -> bool:
        """Apply a successful result. Returns False if the token is stale."""
        if not self._accepts(token):
            return False
        self._state = RequestState.succeeded(data)
        return True

    def reject(self, token: int, message: str) -> bool:
        """Apply a failure. Returns False if the token is stale."""
        if not self._accepts(token):
            return False
        self._state = RequestState.failed(message)
        return True

    def _accepts(self, token: int) -> bool:
        if token != self._token:
            log.debug(
                "Slot %s: discarding stale result (token %d, current %d)",
                self.name, token, self._token,
            )
            return False
        if self._state.status is not Status.LOADING:
            raise RuntimeError(
                f"Slot {self.name} is {self._state.status.value}; "
                "only a loading request can be settled"
            )
        return True
