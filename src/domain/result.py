from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union


T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying a typed error."""

    error: E


Result = Union[Ok[T], Err[E]]


def bind(result: Result, fn: Callable[[T], Result]) -> Result:
    """Chain a step that itself returns a Result; the first `Err` wins."""
    if isinstance(result, Ok):
        return fn(result.value)
    return result
