from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from slotdine.application.sync.reconciler import (
    MutationInFlightError,
    MutationRejectedError,
    SyncReconciler,
)


@dataclass(frozen=True)
class Outcome:
    success: bool
    value: tuple[str, ...] = ()
    error: str | None = None


class Store:
    def __init__(self, value: tuple[str, ...]) -> None:
        self.value = value
        self.writes: list[tuple[str, ...]] = []

    def read(self) -> tuple[str, ...]:
        return self.value

    def write(self, value: tuple[str, ...]) -> None:
        self.writes.append(value)
        self.value = value


def _append(item: str):
    return lambda current: current + (item,)


def _adopt(current: tuple[str, ...], outcome: Outcome) -> tuple[str, ...]:
    return outcome.value


def test_success_adopts_server_echo() -> None:
    store = Store(("a",))
    seen: list[tuple[str, ...]] = []

    async def persist(optimistic):
        seen.append(store.value)
        return Outcome(success=True, value=("a", "b-from-server"))

    outcome = asyncio.run(
        SyncReconciler().mutate(
            "SLT-1:food",
            read=store.read,
            write=store.write,
            apply=_append("b"),
            persist=persist,
            adopt=_adopt,
        )
    )

    assert outcome.success
    assert seen == [("a", "b")]
    assert store.value == ("a", "b-from-server")


def test_persistence_failure_restores_snapshot_exactly(caplog) -> None:
    snapshot = ("a",)
    store = Store(snapshot)

    async def persist(optimistic):
        raise ConnectionError("network down")

    with caplog.at_level(logging.WARNING):
        with pytest.raises(MutationRejectedError, match="network down"):
            asyncio.run(
                SyncReconciler().mutate(
                    "SLT-1:food",
                    read=store.read,
                    write=store.write,
                    apply=_append("b"),
                    persist=persist,
                    adopt=_adopt,
                )
            )

    assert store.value is snapshot
    assert store.writes == [("a", "b"), ("a",)]
    assert "optimistic_mutation_rolled_back" in caplog.text


def test_rejected_outcome_restores_snapshot_and_surfaces_error() -> None:
    store = Store(("a",))

    async def persist(optimistic):
        return Outcome(success=False, error="order has already been delivered")

    with pytest.raises(MutationRejectedError) as exc_info:
        asyncio.run(
            SyncReconciler().mutate(
                "SLT-1:food",
                read=store.read,
                write=store.write,
                apply=_append("b"),
                persist=persist,
                adopt=_adopt,
            )
        )

    assert str(exc_info.value) == "order has already been delivered"
    assert exc_info.value.outcome == Outcome(success=False, error="order has already been delivered")
    assert store.value == ("a",)


def test_rejection_without_message_uses_failure_message() -> None:
    store = Store(("a",))

    async def persist(optimistic):
        return Outcome(success=False)

    with pytest.raises(MutationRejectedError, match="Failed to save"):
        asyncio.run(
            SyncReconciler().mutate(
                "SLT-1:food",
                read=store.read,
                write=store.write,
                apply=_append("b"),
                persist=persist,
                adopt=_adopt,
                failure_message="Failed to save",
            )
        )


def test_adopt_failure_rolls_back() -> None:
    store = Store(("a",))

    async def persist(optimistic):
        return Outcome(success=True)

    def broken_adopt(current, outcome):
        raise ValueError("response carries no order")

    with pytest.raises(MutationRejectedError):
        asyncio.run(
            SyncReconciler().mutate(
                "SLT-1:food",
                read=store.read,
                write=store.write,
                apply=_append("b"),
                persist=persist,
                adopt=broken_adopt,
            )
        )

    assert store.value == ("a",)


def test_local_validation_error_never_touches_state_or_network() -> None:
    store = Store(("a",))
    reconciler = SyncReconciler()
    calls: list[str] = []

    def invalid(current):
        raise ValueError("cart is empty")

    async def persist(optimistic):
        calls.append("persist")
        return Outcome(success=True)

    with pytest.raises(ValueError, match="cart is empty"):
        asyncio.run(
            reconciler.mutate(
                "SLT-1:food",
                read=store.read,
                write=store.write,
                apply=invalid,
                persist=persist,
                adopt=_adopt,
            )
        )

    assert calls == []
    assert store.writes == []
    assert not reconciler.is_in_flight("SLT-1:food")


def test_second_mutation_on_same_record_is_rejected_while_in_flight() -> None:
    store = Store(("a",))
    other = Store(("x",))
    reconciler = SyncReconciler()
    observed: dict[str, object] = {}

    async def other_persist(optimistic):
        return Outcome(success=True, value=("x", "y"))

    async def persist(optimistic):
        observed["in_flight"] = reconciler.is_in_flight("SLT-1:food")
        writes_before = list(store.writes)
        with pytest.raises(MutationInFlightError):
            await reconciler.mutate(
                "SLT-1:food",
                read=store.read,
                write=store.write,
                apply=_append("c"),
                persist=persist,
                adopt=_adopt,
            )
        observed["untouched"] = store.writes == writes_before
        await reconciler.mutate(
            "SLT-1:decoration",
            read=other.read,
            write=other.write,
            apply=_append("y"),
            persist=other_persist,
            adopt=_adopt,
        )
        return Outcome(success=True, value=("a", "b"))

    asyncio.run(
        reconciler.mutate(
            "SLT-1:food",
            read=store.read,
            write=store.write,
            apply=_append("b"),
            persist=persist,
            adopt=_adopt,
        )
    )

    assert observed == {"in_flight": True, "untouched": True}
    assert store.value == ("a", "b")
    assert other.value == ("x", "y")
    assert not reconciler.is_in_flight("SLT-1:food")
