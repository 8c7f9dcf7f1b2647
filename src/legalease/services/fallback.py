"""
Tiered fallback execution.

An operation is described as an ordered list of tiers, each strictly weaker
and more reliable than the last. ``run_tiers`` runs the first tier and, on a
recoverable failure, moves on to the next tier that declares it can recover
from that failure type.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

import structlog

from legalease.exceptions import BackendFailure, LegalEaseError, ParseFailure

logger = structlog.get_logger(__name__)

T = TypeVar("T")

RECOVERABLE = (BackendFailure, ParseFailure)


@dataclass(frozen=True)
class Tier(Generic[T]):
    """One attempt in a fallback chain."""

    name: str
    attempt: Callable[[], Awaitable[T]]
    recovers_from: tuple[type[LegalEaseError], ...] = RECOVERABLE


async def run_tiers(operation: str, tiers: list[Tier[T]]) -> T:
    """
    Run tiers in order until one succeeds.

    A tier is skipped when the previous failure is not one it recovers from.
    Raises the last failure if every eligible tier fails.
    """
    failure: LegalEaseError | None = None

    for tier in tiers:
        if failure is not None and not isinstance(failure, tier.recovers_from):
            logger.debug("fallback_tier_skipped", operation=operation, tier=tier.name)
            continue

        try:
            result = await tier.attempt()
        except RECOVERABLE as e:
            logger.warning(
                "fallback_tier_failed",
                operation=operation,
                tier=tier.name,
                error_type=type(e).__name__,
                error=str(e),
            )
            failure = e
            continue

        if failure is not None:
            logger.info("fallback_tier_used", operation=operation, tier=tier.name)
        return result

    if failure is None:
        raise ValueError(f"No tiers configured for {operation}")
    raise failure
