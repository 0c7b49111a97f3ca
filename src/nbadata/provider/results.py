"""Outcome type for provider calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class ResultStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class ProviderResult(Generic[T]):
    """Value of a provider call plus whether it succeeded.

    ``value`` is always usable: on ``EMPTY`` and ``ERROR`` it holds the empty
    value for the call (``[]`` or ``None``), or the partial rows gathered
    before a failure.
    """

    status: ResultStatus
    value: T
    error: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> "ProviderResult[T]":
        return cls(ResultStatus.OK, value)

    @classmethod
    def empty(cls, value: T) -> "ProviderResult[T]":
        return cls(ResultStatus.EMPTY, value)

    @classmethod
    def failed(cls, value: T, error: str) -> "ProviderResult[T]":
        return cls(ResultStatus.ERROR, value, error)

    @property
    def is_error(self) -> bool:
        return self.status is ResultStatus.ERROR
