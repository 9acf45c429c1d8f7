"""Partial-failure-tolerant concurrent batches for one view."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Settled:
    """Outcome of one batch member: a value or the exception it raised."""

    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: Any) -> Any:
        return self.value if self.error is None else default


async def gather_settled(members: Mapping[str, Awaitable[Any]]) -> dict[str, Settled]:
    """Await every member concurrently; one failure never cancels its siblings.

    Accessors resolve their own fetch failures through fallback, so an
    ``error`` here means the member itself raised (for example a calculator
    bug).
    """
    names = list(members)
    results = await asyncio.gather(*members.values(), return_exceptions=True)
    out: dict[str, Settled] = {}
    for name, res in zip(names, results):
        if isinstance(res, BaseException):
            logger.warning("Batch member %s failed: %s: %s", name, type(res).__name__, res)
            out[name] = Settled(error=res)
        else:
            out[name] = Settled(value=res)
    return out


def error_messages(results: Mapping[str, Settled]) -> dict[str, str]:
    """``{member: "ExcType: message"}`` for members that raised."""
    return {
        name: f"{type(s.error).__name__}: {s.error}" for name, s in results.items() if s.error is not None
    }
