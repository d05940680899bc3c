"""Actor contract and the restricted context handed to each actor.

``Actor`` is the single polymorphic unit: subclasses implement
``on_receive``. ``ActorContext`` is the only view an actor gets of the
system: it can send, spawn children, watch and stop, but never reach into
another actor's mailbox or state.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TYPE_CHECKING

from actorlet.errors import ActorStateError
from actorlet.events import UnhandledMessage
from actorlet.ref import ActorRef

if TYPE_CHECKING:
    from actorlet.system import ActorSystem

type ActorFactory = Callable[[ActorContext], Actor]


class ActorContext:
    """Capability handle bound to one actor.

    Created by ``ActorSystem.spawn`` and passed to the actor factory, so the
    new actor knows its own ref before it handles any message.
    """

    def __init__(
        self, system: ActorSystem, ref: ActorRef, parent: ActorRef | None
    ) -> None:
        self._system = system
        self._ref = ref
        self._parent = parent
        self._logger = logging.getLogger(f"actorlet.actor.{ref.id}")

    @property
    def self(self) -> ActorRef:
        return self._ref

    @property
    def parent(self) -> ActorRef | None:
        return self._parent

    @property
    def children(self) -> tuple[ActorRef, ...]:
        return self._system.children(self._ref)

    @property
    def log(self) -> logging.Logger:
        return self._logger

    def send(self, ref: ActorRef, message: Any) -> bool:
        return self._system.send(ref, message)

    def spawn(self, factory: ActorFactory) -> ActorRef:
        """Spawn a child of this actor."""
        return self._system.spawn(factory, parent=self._ref)

    def watch(self, ref: ActorRef) -> None:
        self._system.watch(self._ref, ref)

    def unwatch(self, ref: ActorRef) -> None:
        self._system.unwatch(self._ref, ref)

    def stop(self, ref: ActorRef | None = None) -> bool:
        """Stop this actor, or one of its children.

        Stopping itself from inside ``on_receive`` takes effect once the
        handler returns.

        Returns
        -------
        bool
            ``False`` if *ref* has no live actor.

        Raises
        ------
        ActorStateError
            If *ref* is a live actor that is neither this actor nor one of
            its children.
        """
        target = self._ref if ref is None else ref
        if not self._system.is_alive(target):
            return False
        if target != self._ref and target not in self.children:
            msg = f"{self._ref} can only stop itself or its children, not {target}"
            raise ActorStateError(msg)
        return self._system.stop(target)

    def unhandled(self, message: Any) -> None:
        self._system.send(self._system.root, UnhandledMessage(message, self._ref))


class Actor(ABC):
    """Base class for all actors.

    Subclasses keep private state as plain attributes and mutate it only in
    ``on_receive``; the dispatcher guarantees the handler is never re-entered.

    The context may be taken in ``__init__`` (``Actor.__init__(self, ctx)``)
    or bound by the system after the factory returns.

    Examples
    --------
    >>> class Counter(Actor):
    ...     def __init__(self, ctx: ActorContext) -> None:
    ...         super().__init__(ctx)
    ...         self.count = 0
    ...
    ...     def on_receive(self, message: Any) -> None:
    ...         match message:
    ...             case "inc":
    ...                 self.count += 1
    ...             case _:
    ...                 self.unhandled(message)
    >>> ref = system.spawn(Counter)
    """

    def __init__(self, context: ActorContext | None = None) -> None:
        self._context = context

    @property
    def context(self) -> ActorContext:
        context = getattr(self, "_context", None)
        if context is None:
            raise ActorStateError("Actor context not set")
        return context

    @property
    def ref(self) -> ActorRef:
        return self.context.self

    def bind(self, context: ActorContext) -> None:
        """Attach *context* to this actor.

        Raises
        ------
        ActorStateError
            If the actor is already bound to another context.
        """
        current = getattr(self, "_context", None)
        if current is context:
            return
        if current is not None:
            msg = f"Actor {type(self).__name__} is already bound to {current.self}"
            raise ActorStateError(msg)
        self._context = context

    @abstractmethod
    def on_receive(self, message: Any) -> None:
        """Handle one message."""

    def pre_start(self) -> None:
        """Called once the actor is registered, before any message."""

    def post_stop(self) -> None:
        """Called after the actor has been removed from the system."""

    def unhandled(self, message: Any) -> None:
        """Report *message* to the root actor as unhandled."""
        self.context.unhandled(message)


class FunctionActor(Actor):
    """Actor whose behavior is a plain ``handler(context, message)`` function."""

    def __init__(
        self,
        context: ActorContext,
        handler: Callable[[ActorContext, Any], None],
    ) -> None:
        super().__init__(context)
        self._handler = handler

    def on_receive(self, message: Any) -> None:
        self._handler(self.context, message)


def receive(handler: Callable[[ActorContext, Any], None]) -> ActorFactory:
    """Build an actor factory from a message handler function.

    Examples
    --------
    >>> seen = []
    >>> ref = system.spawn(receive(lambda ctx, msg: seen.append(msg)))
    """

    def factory(context: ActorContext) -> Actor:
        return FunctionActor(context, handler)

    return factory
