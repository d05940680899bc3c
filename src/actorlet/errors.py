"""Exception hierarchy for actorlet.

Handler failures never surface here: they are contained by the dispatcher
and turned into ``Terminated`` notices. These exceptions cover misuse of the
runtime itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from actorlet.ref import ActorRef


class ActorletError(Exception):
    """Base class for all actorlet errors."""


class UnknownActorError(ActorletError):
    """Raised when an operation targets a ref with no live actor.

    Parameters
    ----------
    ref : ActorRef
        The ref that could not be resolved.

    Examples
    --------
    >>> try:
    ...     system.watch(watcher, ActorRef(999))
    ... except UnknownActorError as e:
    ...     e.ref
    ActorRef(serial=999)
    """

    def __init__(self, ref: ActorRef) -> None:
        super().__init__(f"No live actor for {ref}")
        self.ref = ref


class ActorStateError(ActorletError):
    """Raised on invalid runtime state, e.g. an actor bound twice.

    Indicates a bug in the hosting code rather than a recoverable condition.
    """
