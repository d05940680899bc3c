"""The root actor.

Spawned by every ``ActorSystem`` as ``ACTOR-0``. It is the default parent of
top-level actors and the sink for dead letters and unhandled messages, which
it logs and republishes on the system event stream.
"""

from __future__ import annotations

from typing import Any

from actorlet.actor import Actor, ActorContext
from actorlet.events import DeadLetter, EventStream, UnhandledMessage
from actorlet.messages import Terminated


class Guardian(Actor):
    def __init__(
        self, context: ActorContext, events: EventStream, *, log_dead_letters: bool
    ) -> None:
        super().__init__(context)
        self._events = events
        self._log_dead_letters = log_dead_letters

    def on_receive(self, message: Any) -> None:
        log = self.context.log
        match message:
            case DeadLetter(message=payload, recipient=recipient):
                if self._log_dead_letters:
                    log.info(
                        "Dead letter to %s: %s", recipient, type(payload).__name__
                    )
                self._events.publish(message)
            case UnhandledMessage(message=Terminated(ref=dead), ref=ref):
                log.info("%s did not handle termination of %s", ref, dead)
                self._events.publish(message)
            case UnhandledMessage(message=payload, ref=ref):
                log.debug("%s did not handle %s", ref, type(payload).__name__)
                self._events.publish(message)
            case Terminated(ref=ref):
                log.debug("Watched actor %s terminated", ref)
            case _:
                log.warning("Root actor ignoring %s", type(message).__name__)
