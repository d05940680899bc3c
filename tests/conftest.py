"""Shared fixtures and test actors for actorlet tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import pytest

from actorlet import Actor, ActorContext, ActorRef, ActorSystem, receive


@dataclass(frozen=True)
class Fail:
    """Intentionally fail processing."""

    reason: str = "Intentional failure"


class FailingActor(Actor):
    """Records messages and raises on ``Fail``."""

    def __init__(self, ctx: ActorContext, log: list[Any]) -> None:
        super().__init__(ctx)
        self.log = log

    def on_receive(self, message: Any) -> None:
        match message:
            case Fail(reason):
                raise RuntimeError(reason)
            case _:
                self.log.append(message)


type SpawnRecorder = Callable[[], tuple[ActorRef, list[Any]]]


@pytest.fixture
def system() -> Iterator[ActorSystem]:
    with ActorSystem("test") as sys:
        yield sys


@pytest.fixture
def spawn_recorder(system: ActorSystem) -> SpawnRecorder:
    """Spawn an actor that appends every message it receives to a list."""

    def spawn() -> tuple[ActorRef, list[Any]]:
        log: list[Any] = []
        ref = system.spawn(receive(lambda ctx, msg: log.append(msg)))
        return ref, log

    return spawn


@pytest.fixture
def spawn_failing(system: ActorSystem) -> SpawnRecorder:
    def spawn() -> tuple[ActorRef, list[Any]]:
        log: list[Any] = []
        ref = system.spawn(lambda ctx: FailingActor(ctx, log))
        return ref, log

    return spawn
