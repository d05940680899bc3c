"""System event types and the subscriber table that fans them out.

Events are produced by the runtime for dead letters, unhandled messages and
actor termination. Subscribers are ordinary actors; events reach them through
their mailboxes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from actorlet.ref import ActorRef


@dataclass(frozen=True)
class DeadLetter:
    """A message that could not be delivered because its target is gone.

    Parameters
    ----------
    message : Any
        The undeliverable payload.
    recipient : ActorRef
        The ref the message was addressed to.

    Examples
    --------
    >>> from actorlet import DeadLetter
    >>> DeadLetter(message="hi", recipient=ActorRef(999))
    DeadLetter(message='hi', recipient=ActorRef(serial=999))
    """

    message: Any
    recipient: ActorRef


@dataclass(frozen=True)
class UnhandledMessage:
    """A message an actor declined via ``Actor.unhandled``."""

    message: Any
    ref: ActorRef


@dataclass(frozen=True)
class ActorStopped:
    """Published for every actor that reaches the DEAD state."""

    ref: ActorRef


@dataclass(frozen=True)
class ActorFailed:
    """Published when an actor dies because its handler raised.

    Parameters
    ----------
    ref : ActorRef
        The failed actor.
    error : Exception
        The exception raised by ``on_receive``.
    """

    ref: ActorRef
    error: Exception


class EventStream:
    """Subscriber table keyed by event type.

    Matching uses ``isinstance``, so subscribing to a base class (or
    ``object``) receives every subclass. An actor subscribed through several
    matching types still receives each event once.

    Parameters
    ----------
    send : Callable[[ActorRef, Any], bool]
        Delivery function, normally ``ActorSystem.send``.

    Examples
    --------
    >>> stream = EventStream(system.send)
    >>> stream.subscribe(DeadLetter, listener)
    >>> stream.publish(DeadLetter("lost", ActorRef(42)))
    """

    def __init__(self, send: Callable[[ActorRef, Any], bool]) -> None:
        self._send = send
        self._subscribers: dict[type, list[ActorRef]] = {}

    def subscribe(self, event_type: type, ref: ActorRef) -> None:
        refs = self._subscribers.setdefault(event_type, [])
        if ref not in refs:
            refs.append(ref)

    def unsubscribe(self, event_type: type, ref: ActorRef) -> None:
        refs = self._subscribers.get(event_type)
        if refs is None:
            return
        if ref in refs:
            refs.remove(ref)
        if not refs:
            del self._subscribers[event_type]

    def remove(self, ref: ActorRef) -> None:
        """Drop *ref* from every subscription."""
        for event_type in list(self._subscribers):
            self.unsubscribe(event_type, ref)

    def has_subscribers(self, event: object) -> bool:
        return any(isinstance(event, et) for et in self._subscribers)

    def publish(self, event: object) -> int:
        """Send *event* to every matching subscriber.

        Returns
        -------
        int
            Number of subscribers the event was sent to.
        """
        targets: dict[ActorRef, None] = {}
        for event_type, refs in self._subscribers.items():
            if isinstance(event, event_type):
                targets.update(dict.fromkeys(refs))
        for ref in targets:
            self._send(ref, event)
        return len(targets)
