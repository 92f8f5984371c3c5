"""Optimistic update with rollback for mutations against the order boundary.

Each mutation snapshots local state, applies the optimistic guess, awaits the
persistence call and then either adopts the server echo or restores the
snapshot exactly. Only one mutation per record key may be in flight; a second
one is rejected before it touches state.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Generic, Protocol, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")
R = TypeVar("R", bound="MutationOutcome")


class MutationOutcome(Protocol):
    success: bool
    error: str | None


class MutationRejectedError(Exception):
    def __init__(self, message: str, outcome: object | None = None) -> None:
        super().__init__(message)
        self.outcome = outcome


class MutationInFlightError(Exception):
    pass


class SyncReconciler(Generic[S]):
    def __init__(self) -> None:
        self._in_flight: set[str] = set()

    def is_in_flight(self, record_key: str) -> bool:
        return record_key in self._in_flight

    async def mutate(
        self,
        record_key: str,
        *,
        read: Callable[[], S],
        write: Callable[[S], None],
        apply: Callable[[S], S],
        persist: Callable[[S], Awaitable[R]],
        adopt: Callable[[S, R], S],
        failure_message: str = "mutation failed",
    ) -> R:
        if record_key in self._in_flight:
            raise MutationInFlightError(f"a mutation for {record_key} is already in flight")

        snapshot = read()
        optimistic = apply(snapshot)

        self._in_flight.add(record_key)
        try:
            write(optimistic)
            try:
                outcome = await persist(optimistic)
            except Exception as exc:
                write(snapshot)
                logger.warning(
                    "optimistic_mutation_rolled_back",
                    extra={"record_key": record_key, "reason": type(exc).__name__},
                )
                raise MutationRejectedError(str(exc) or failure_message) from exc

            if not outcome.success:
                write(snapshot)
                logger.warning(
                    "optimistic_mutation_rolled_back",
                    extra={"record_key": record_key, "reason": "rejected"},
                )
                raise MutationRejectedError(outcome.error or failure_message, outcome=outcome)

            try:
                adopted = adopt(read(), outcome)
            except Exception as exc:
                write(snapshot)
                logger.warning(
                    "optimistic_mutation_rolled_back",
                    extra={"record_key": record_key, "reason": "malformed_response"},
                )
                raise MutationRejectedError(failure_message, outcome=outcome) from exc

            write(adopted)
            return outcome
        finally:
            self._in_flight.discard(record_key)
