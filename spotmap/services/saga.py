"""Compensation log for multi-entity operations.

Spots, reviews and tags live in separate collections and are written without a
shared transaction. An operation that touches several of them records an undo
action after each successful write; if a later step raises, the recorded
actions run before the error propagates.

Usage:
    async with Saga("create_spot") as saga:
        review = await reviews.create(...)
        saga.add_compensation("delete_review", reviews.remove, review.id)
        ...

Compensations run in the order their steps completed. They are best effort: a
failing compensation is logged and reported as a ``CompensationOutcome``, and
never replaces the error that triggered the unwind.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CompensationOutcome:
    """Result of running one compensation."""

    step: str
    succeeded: bool
    error: Exception | None = None


@dataclass
class _Compensation:
    step: str
    action: Callable[[], Awaitable[Any]]


@dataclass
class Saga:
    """Records undo actions for completed steps and runs them on failure."""

    name: str
    outcomes: list[CompensationOutcome] = field(default_factory=list, init=False)
    _compensations: list[_Compensation] = field(default_factory=list, init=False, repr=False)

    def add_compensation(
        self, step: str, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any
    ) -> None:
        """Register the undo action for a step that just succeeded.

        Arguments are bound now, so pass plain ids rather than ORM objects that
        a later rollback may expire.
        """
        self._compensations.append(
            _Compensation(step=step, action=functools.partial(func, *args, **kwargs))
        )

    @property
    def pending(self) -> list[str]:
        """Names of steps that would be compensated on failure."""
        return [compensation.step for compensation in self._compensations]

    async def unwind(self) -> list[CompensationOutcome]:
        """Run every registered compensation once, in completion order."""
        outcomes = []
        while self._compensations:
            compensation = self._compensations.pop(0)
            try:
                await compensation.action()
            except Exception as e:
                logger.warning(
                    f"Saga {self.name}: compensation '{compensation.step}' failed: {e}"
                )
                outcomes.append(CompensationOutcome(compensation.step, False, e))
            else:
                logger.debug(f"Saga {self.name}: compensated '{compensation.step}'")
                outcomes.append(CompensationOutcome(compensation.step, True))
        self.outcomes.extend(outcomes)
        return outcomes

    async def __aenter__(self) -> "Saga":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if isinstance(exc, Exception):
            logger.info(f"Saga {self.name} failed ({type(exc).__name__}: {exc}), unwinding")
            await self.unwind()
        return False
