"""Administrative messages understood by the runtime.

``Terminated`` is delivered to watchers when a watched actor dies.
``PoisonPill`` asks an actor to stop once it reaches the front of its
mailbox.
"""

from __future__ import annotations

from dataclasses import dataclass

from actorlet.ref import ActorRef


@dataclass(frozen=True)
class Terminated:
    """Signal sent when a watched actor is stopped or has failed.

    Delivered through the watcher's mailbox like any other message, so it is
    ordered with the rest of the watcher's traffic.

    Parameters
    ----------
    ref : ActorRef
        Reference to the actor that terminated.

    Examples
    --------
    >>> from actorlet import Terminated
    >>> event = Terminated(ref=watched_ref)
    """

    ref: ActorRef


@dataclass(frozen=True)
class PoisonPill:
    """Stop the receiving actor after every message enqueued before it.

    Never reaches ``on_receive``.

    Examples
    --------
    >>> system.send(worker, PoisonPill())
    True
    """
