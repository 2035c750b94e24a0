"""Run concurrent branches that succeed or fail independently."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """The result of one branch: a value, or the exception that ended it."""

    value: T | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        if self.error is not None:
            return default
        return self.value  # type: ignore[return-value]


async def settle(awaitable: Awaitable[T]) -> Outcome[T]:
    """Await one branch, capturing any ``Exception`` as a failed outcome."""
    try:
        return Outcome(value=await awaitable)
    except Exception as e:
        return Outcome(error=e)


async def gather_settled(awaitables: Iterable[Awaitable[T]]) -> list[Outcome[T]]:
    """Run branches concurrently and collect every outcome in input order.

    A failing branch never cancels its siblings.
    """
    return list(await asyncio.gather(*(settle(a) for a in awaitables)))
