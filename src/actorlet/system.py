"""Actor system: the registry and coordinator.

Provides ``ActorSystem``, the sole owner of actor records. It assigns refs,
routes messages into mailboxes, maintains the watch relation, drives the
dispatcher and converts handler failures into ``Terminated`` notices.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any

from actorlet.actor import Actor, ActorContext, ActorFactory
from actorlet.config import ActorletConfig
from actorlet.dispatcher import Dispatcher, Failed, Outcome, Processed, Skipped
from actorlet.errors import ActorStateError, UnknownActorError
from actorlet.events import ActorFailed, ActorStopped, DeadLetter, EventStream
from actorlet.guardian import Guardian
from actorlet.mailbox import Mailbox
from actorlet.messages import PoisonPill, Terminated
from actorlet.ref import ActorRef


@dataclass(eq=False)
class ActorRecord:
    """Everything the system tracks for one live actor."""

    actor: Actor
    mailbox: Mailbox[Any]
    parent: ActorRef | None
    watchers: set[ActorRef] = field(default_factory=set)
    watching: set[ActorRef] = field(default_factory=set)
    children: dict[ActorRef, None] = field(default_factory=dict)
    alive: bool = True
    stop_requested: bool = False


class ActorSystem:
    """Registry of actors and entry point for spawn, send and watch.

    Drive it synchronously with ``run_until_idle()``, or use it as an async
    context manager to have sends drained by the running event loop.

    Examples
    --------
    >>> system = ActorSystem()
    >>> ref = system.spawn(receive(lambda ctx, msg: print(msg)))
    >>> system.send(ref, "hello")
    True
    >>> system.run_until_idle()
    hello
    1
    """

    def __init__(
        self, name: str | None = None, *, config: ActorletConfig | None = None
    ) -> None:
        self._config = config or ActorletConfig()
        self._name = name or self._config.system_name
        self._logger = logging.getLogger(f"actorlet.system.{self._name}")
        self._records: dict[ActorRef, ActorRecord] = {}
        self._serials = itertools.count()
        self._shutting_down = False
        self._terminated = False
        self._dispatcher = Dispatcher(
            self._deliver_one,
            self._fail,
            turns_per_tick=self._config.dispatcher.turns_per_tick,
        )
        self._events = EventStream(self.send)
        self._root = self._install(
            lambda ctx: Guardian(
                ctx,
                self._events,
                log_dead_letters=self._config.dead_letters.log,
            ),
            parent=None,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> ActorletConfig:
        return self._config

    @property
    def root(self) -> ActorRef:
        return self._root

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def actors(self) -> tuple[ActorRef, ...]:
        """Live refs in creation order, root first."""
        return tuple(ref for ref, record in self._records.items() if record.alive)

    def __enter__(self) -> ActorSystem:
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()

    async def __aenter__(self) -> ActorSystem:
        self._dispatcher.bind(asyncio.get_running_loop())
        return self

    async def __aexit__(self, *exc: object) -> None:
        try:
            self.shutdown()
            await self._dispatcher.wait_idle()
        finally:
            self._dispatcher.unbind()

    def __contains__(self, ref: object) -> bool:
        return isinstance(ref, ActorRef) and self.is_alive(ref)

    def is_alive(self, ref: ActorRef) -> bool:
        return self._live(ref) is not None

    def children(self, ref: ActorRef) -> tuple[ActorRef, ...]:
        record = self._live(ref)
        if record is None:
            return ()
        return tuple(record.children)

    def watching(self, ref: ActorRef) -> tuple[ActorRef, ...]:
        """Live actors *ref* currently watches, in ref order."""
        record = self._live(ref)
        if record is None:
            return ()
        return tuple(sorted(record.watching))

    def lookup(self, actor_id: str) -> ActorRef | None:
        """Resolve an ``ACTOR-<n>`` id to a live ref."""
        try:
            ref = ActorRef.parse(actor_id)
        except ValueError:
            return None
        return ref if self.is_alive(ref) else None

    def spawn(self, factory: ActorFactory, *, parent: ActorRef | None = None) -> ActorRef:
        """Create an actor and return its ref.

        Parameters
        ----------
        factory : ActorFactory
            Called with the new actor's ``ActorContext``; must return an
            ``Actor``. An ``Actor`` subclass taking the context works as-is.
        parent : ActorRef | None
            Parent of the new actor. Defaults to the root actor.

        Returns
        -------
        ActorRef

        Raises
        ------
        UnknownActorError
            If *parent* is not alive.
        ActorStateError
            If the system is shut down, or the factory returns an actor that
            is already bound to another ref.
        TypeError
            If the factory does not return an ``Actor``.
        """
        if self._terminated:
            raise ActorStateError(f"Actor system '{self._name}' is shut down")
        parent_ref = self._root if parent is None else parent
        if self._live(parent_ref) is None:
            raise UnknownActorError(parent_ref)
        ref = self._install(factory, parent=parent_ref)
        self._logger.debug("Spawned %s under %s", ref, parent_ref)
        return ref

    def send(self, ref: ActorRef, message: Any) -> bool:
        """Enqueue *message* for *ref* and request a turn.

        The handler never runs inside this call.

        Returns
        -------
        bool
            ``True`` if enqueued; ``False`` if *ref* has no live actor, in
            which case the message is routed to the root actor as a
            ``DeadLetter``.
        """
        record = self._live(ref)
        if record is None:
            self._dead_letter(ref, message)
            return False
        record.mailbox.put(message)
        self._dispatcher.schedule(ref)
        return True

    def watch(self, watcher: ActorRef, watched: ActorRef) -> None:
        """Register *watcher* to receive ``Terminated`` when *watched* dies.

        Raises
        ------
        UnknownActorError
            If *watcher* is not alive, or *watched* is not alive and the
            watch policy is strict.
        """
        watcher_record = self._live(watcher)
        if watcher_record is None:
            raise UnknownActorError(watcher)
        watched_record = self._live(watched)
        if watched_record is None:
            if self._config.watch.strict:
                raise UnknownActorError(watched)
            self.send(watcher, Terminated(watched))
            return
        watched_record.watchers.add(watcher)
        watcher_record.watching.add(watched)

    def unwatch(self, watcher: ActorRef, watched: ActorRef) -> None:
        watched_record = self._live(watched)
        if watched_record is not None:
            watched_record.watchers.discard(watcher)
        watcher_record = self._live(watcher)
        if watcher_record is not None:
            watcher_record.watching.discard(watched)

    def stop(self, ref: ActorRef) -> bool:
        """Stop an actor; watchers are notified exactly as on failure.

        An actor stopped while its handler is running is removed as soon as
        that handler returns.

        Returns
        -------
        bool
            ``False`` if *ref* has no live actor.

        Raises
        ------
        ActorStateError
            If *ref* is the root actor.
        """
        if ref == self._root:
            raise ActorStateError("The root actor cannot be stopped")
        record = self._live(ref)
        if record is None:
            return False
        if self._dispatcher.is_busy(ref):
            record.stop_requested = True
        else:
            self._terminate(ref)
        return True

    def subscribe(self, event_type: type, ref: ActorRef) -> None:
        """Deliver system events of *event_type* to the actor *ref*.

        Raises
        ------
        UnknownActorError
            If *ref* is not alive.
        ActorStateError
            If *ref* is the root actor.
        """
        if ref == self._root:
            raise ActorStateError("The root actor cannot subscribe to events")
        if self._live(ref) is None:
            raise UnknownActorError(ref)
        self._events.subscribe(event_type, ref)

    def unsubscribe(self, event_type: type, ref: ActorRef) -> None:
        self._events.unsubscribe(event_type, ref)

    def run_once(self) -> bool:
        return self._dispatcher.run_once()

    def run_until_idle(self, max_turns: int | None = None) -> int:
        return self._dispatcher.run_until_idle(max_turns)

    async def wait_idle(self) -> None:
        await self._dispatcher.wait_idle()

    def shutdown(self) -> None:
        """Stop every top-level actor (children first) and refuse new spawns."""
        if self._terminated:
            return
        self._shutting_down = True
        try:
            top_level = self.children(self._root)
            self._logger.info("Shutting down (%d top-level actors)", len(top_level))
            for ref in top_level:
                self.stop(ref)
        finally:
            self._shutting_down = False
            self._terminated = True

    def _live(self, ref: ActorRef) -> ActorRecord | None:
        record = self._records.get(ref)
        if record is None or not record.alive:
            return None
        return record

    def _install(self, factory: ActorFactory, *, parent: ActorRef | None) -> ActorRef:
        ref = ActorRef(next(self._serials))
        if ref in self._records:
            raise ActorStateError(f"{ref} is already registered")

        context = ActorContext(self, ref, parent)
        actor = factory(context)
        if not isinstance(actor, Actor):
            msg = f"Actor factory must return an Actor, got: {type(actor).__name__}"
            raise TypeError(msg)
        actor.bind(context)

        self._records[ref] = ActorRecord(actor=actor, mailbox=Mailbox(), parent=parent)
        if parent is not None:
            self._records[parent].children[ref] = None

        try:
            actor.pre_start()
        except Exception as exc:
            self._terminate(ref, error=exc)
            raise
        return ref

    def _deliver_one(self, ref: ActorRef) -> Outcome:
        record = self._live(ref)
        if record is None or record.mailbox.empty():
            return Skipped(ref)

        message = record.mailbox.pop()
        if isinstance(message, PoisonPill):
            self._terminate(ref)
            return Processed(ref, pending=False)

        try:
            record.actor.on_receive(message)
        except Exception as exc:
            return Failed(ref, exc)

        if record.stop_requested:
            self._terminate(ref)
        if not record.alive:
            return Processed(ref, pending=False)
        return Processed(ref, pending=not record.mailbox.empty())

    def _fail(self, outcome: Failed) -> None:
        ref, error = outcome.ref, outcome.error
        record = self._live(ref)
        if record is None:
            return
        if ref == self._root:
            self._logger.error("Root actor failed, keeping it alive", exc_info=error)
            if not record.mailbox.empty():
                self._dispatcher.schedule(ref)
            return
        record.actor.context.log.error("Actor %s failed", ref, exc_info=error)
        self._terminate(ref, error=error)

    def _terminate(self, ref: ActorRef, *, error: Exception | None = None) -> None:
        record = self._live(ref)
        if record is None:
            return
        record.alive = False

        for child in list(record.children):
            child_record = self._live(child)
            if child_record is None:
                continue
            if self._dispatcher.is_busy(child):
                child_record.stop_requested = True
            else:
                self._terminate(child)

        del self._records[ref]
        if record.parent is not None and record.parent in self._records:
            self._records[record.parent].children.pop(ref, None)
        for watched in record.watching:
            watched_record = self._live(watched)
            if watched_record is not None:
                watched_record.watchers.discard(ref)
        self._events.remove(ref)
        undelivered = record.mailbox.drain()

        try:
            record.actor.post_stop()
        except Exception:
            record.actor.context.log.exception("post_stop failed for %s", ref)

        self._logger.info("Stopped %s", ref)
        for watcher in sorted(record.watchers):
            watcher_record = self._live(watcher)
            if watcher_record is not None:
                watcher_record.watching.discard(ref)
            self.send(watcher, Terminated(ref))

        if self._config.dead_letters.redirect_undelivered:
            for message in undelivered:
                if not isinstance(message, PoisonPill):
                    self._dead_letter(ref, message)

        if error is not None:
            self._events.publish(ActorFailed(ref, error))
        self._events.publish(ActorStopped(ref))

    def _dead_letter(self, ref: ActorRef, message: Any) -> None:
        if self._shutting_down and self._config.suppress_dead_letters_on_shutdown:
            return
        root = self._live(self._root)
        if root is None or ref == self._root or isinstance(message, DeadLetter):
            self._logger.warning(
                "Dropping undeliverable %s for %s", type(message).__name__, ref
            )
            return
        root.mailbox.put(DeadLetter(message, ref))
        self._dispatcher.schedule(self._root)
