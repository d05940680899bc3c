from __future__ import annotations

from typing import Any

import pytest

from actorlet import (
    Actor,
    ActorContext,
    ActorStateError,
    ActorSystem,
    UnhandledMessage,
    receive,
)


class Counter(Actor):
    def __init__(self, ctx: ActorContext) -> None:
        super().__init__(ctx)
        self.count = 0

    def on_receive(self, message: Any) -> None:
        match message:
            case "inc":
                self.count += 1
            case _:
                self.unhandled(message)


class Bare(Actor):
    """Actor that never takes its context in ``__init__``."""

    def __init__(self) -> None:
        self.seen: list[Any] = []

    def on_receive(self, message: Any) -> None:
        self.seen.append((self.ref, message))


def test_actor_class_is_a_factory(system: ActorSystem) -> None:
    instances: list[Counter] = []

    def factory(ctx: ActorContext) -> Counter:
        actor = Counter(ctx)
        instances.append(actor)
        return actor

    ref = system.spawn(factory)
    system.send(ref, "inc")
    system.send(ref, "inc")
    system.run_until_idle()

    assert instances[0].count == 2
    assert instances[0].ref == ref
    assert system.spawn(Counter) != ref


def test_system_binds_context_after_factory(system: ActorSystem) -> None:
    bare = Bare()
    ref = system.spawn(lambda ctx: bare)
    system.send(ref, "hi")
    system.run_until_idle()

    assert bare.seen == [(ref, "hi")]
    assert bare.context.self == ref


def test_context_before_binding_raises() -> None:
    with pytest.raises(ActorStateError, match="context not set"):
        _ = Bare().context


def test_binding_twice_raises(system: ActorSystem) -> None:
    bare = Bare()
    system.spawn(lambda ctx: bare)
    with pytest.raises(ActorStateError, match="already bound"):
        system.spawn(lambda ctx: bare)


def test_factory_must_return_an_actor(system: ActorSystem) -> None:
    with pytest.raises(TypeError, match="must return an Actor"):
        system.spawn(lambda ctx: object())  # type: ignore[arg-type,return-value]


def test_factory_receives_its_own_ref(system: ActorSystem) -> None:
    seen: list[Any] = []

    def factory(ctx: ActorContext) -> Actor:
        seen.append(ctx.self)
        return Counter(ctx)

    ref = system.spawn(factory)
    assert seen == [ref]


def test_handler_can_reply_through_context(system: ActorSystem) -> None:
    replies: list[Any] = []
    sink = system.spawn(receive(lambda ctx, msg: replies.append(msg)))
    echo = system.spawn(receive(lambda ctx, msg: ctx.send(sink, (ctx.self, msg))))

    system.send(echo, "ping")
    system.run_until_idle()

    assert replies == [(echo, "ping")]


def test_unhandled_messages_reach_subscribers(system: ActorSystem) -> None:
    events: list[Any] = []
    listener = system.spawn(receive(lambda ctx, msg: events.append(msg)))
    system.subscribe(UnhandledMessage, listener)

    ref = system.spawn(Counter)
    system.send(ref, "decrement")
    system.run_until_idle()

    assert events == [UnhandledMessage("decrement", ref)]


def test_lifecycle_hooks_run(system: ActorSystem) -> None:
    calls: list[str] = []

    class Lifecycle(Actor):
        def pre_start(self) -> None:
            calls.append("pre_start")

        def on_receive(self, message: Any) -> None:
            calls.append(message)

        def post_stop(self) -> None:
            calls.append("post_stop")

    ref = system.spawn(lambda ctx: Lifecycle(ctx))
    system.send(ref, "msg")
    system.run_until_idle()
    system.stop(ref)

    assert calls == ["pre_start", "msg", "post_stop"]


def test_failing_pre_start_propagates_and_leaves_no_record(
    system: ActorSystem,
) -> None:
    class Broken(Actor):
        def pre_start(self) -> None:
            raise RuntimeError("cannot start")

        def on_receive(self, message: Any) -> None:
            pass

    before = system.actors
    with pytest.raises(RuntimeError, match="cannot start"):
        system.spawn(lambda ctx: Broken(ctx))
    assert system.actors == before


def test_context_stop_is_limited_to_self_and_children(system: ActorSystem) -> None:
    errors: list[Exception] = []
    other = system.spawn(Counter)

    def handler(ctx: ActorContext, msg: Any) -> None:
        try:
            ctx.stop(other)
        except ActorStateError as e:
            errors.append(e)

    ref = system.spawn(receive(handler))
    system.send(ref, "go")
    system.run_until_idle()

    assert len(errors) == 1
    assert other in system


def test_context_stop_on_a_dead_child_returns_false(system: ActorSystem) -> None:
    results: list[bool] = []

    def handler(ctx: ActorContext, msg: Any) -> None:
        child = ctx.spawn(Counter)
        results.append(ctx.stop(child))
        results.append(ctx.stop(child))

    ref = system.spawn(receive(handler))
    system.send(ref, "go")
    system.run_until_idle()

    assert results == [True, False]
    assert ref in system


def test_context_log_is_named_after_the_actor(system: ActorSystem) -> None:
    names: list[str] = []
    ref = system.spawn(receive(lambda ctx, msg: names.append(ctx.log.name)))
    system.send(ref, "x")
    system.run_until_idle()

    assert names == [f"actorlet.actor.{ref.id}"]
