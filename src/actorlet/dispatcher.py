"""Cooperative dispatch loop.

Turns "a message was enqueued" into "the owning actor is invoked with
exactly that message, in order, one at a time". The dispatcher holds a ready
queue of ref tokens; each turn pops one token, delivers at most one message
and re-queues the token at the tail while the mailbox still has work.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from actorlet.errors import ActorStateError
from actorlet.ref import ActorRef

logger = logging.getLogger("actorlet.dispatcher")


@dataclass(frozen=True)
class Processed:
    """One message was handled; *pending* tells if the mailbox has more."""

    ref: ActorRef
    pending: bool


@dataclass(frozen=True)
class Failed:
    """The handler raised; the actor must transition to DEAD."""

    ref: ActorRef
    error: Exception


@dataclass(frozen=True)
class Skipped:
    """Nothing to deliver: the actor is gone or its mailbox is empty."""

    ref: ActorRef


type Outcome = Processed | Failed | Skipped


class Dispatcher:
    """Ready queue plus per-actor exclusivity marker.

    The dispatcher knows nothing about records or mailboxes. It calls
    *deliver* to run one message for a ref, and hands ``Failed`` outcomes to
    *on_failure*.

    Parameters
    ----------
    deliver : Callable[[ActorRef], Outcome]
        Pops at most one message for the ref and runs its handler.
    on_failure : Callable[[Failed], None]
        Performs the DEAD transition for a failed actor.
    turns_per_tick : int
        Turns run per event-loop callback when bound to a loop.

    Examples
    --------
    >>> dispatcher = Dispatcher(system_deliver, system_fail)
    >>> dispatcher.schedule(ref)
    >>> dispatcher.run_until_idle()
    1
    """

    def __init__(
        self,
        deliver: Callable[[ActorRef], Outcome],
        on_failure: Callable[[Failed], None],
        *,
        turns_per_tick: int = 1,
    ) -> None:
        if turns_per_tick < 1:
            msg = f"turns_per_tick must be >= 1, got: {turns_per_tick}"
            raise ValueError(msg)
        self._deliver = deliver
        self._on_failure = on_failure
        self._turns_per_tick = turns_per_tick
        self._ready: deque[ActorRef] = deque()
        self._scheduled: set[ActorRef] = set()
        self._busy: set[ActorRef] = set()
        self._turns = 0
        self._loop: asyncio.AbstractEventLoop | None = None
        self._armed = False
        self._idle: asyncio.Event | None = None

    @property
    def turns(self) -> int:
        """Total turns that found a token to run."""
        return self._turns

    def pending(self) -> int:
        return len(self._ready)

    def is_busy(self, ref: ActorRef) -> bool:
        return ref in self._busy

    def is_scheduled(self, ref: ActorRef) -> bool:
        return ref in self._scheduled

    def schedule(self, ref: ActorRef) -> None:
        """Request a turn for *ref*.

        Safe to call repeatedly: a ref that is already queued or running is
        not queued again; the running turn re-queues it if work remains.
        """
        if ref in self._scheduled:
            return
        self._scheduled.add(ref)
        self._ready.append(ref)
        self._arm()

    def run_once(self) -> bool:
        """Run a single turn.

        Returns
        -------
        bool
            ``False`` if the ready queue was empty.

        Raises
        ------
        ActorStateError
            If called from inside a handler.
        """
        if self._busy:
            msg = "Dispatcher turns cannot be nested inside a handler"
            raise ActorStateError(msg)
        if not self._ready:
            return False

        ref = self._ready.popleft()
        self._busy.add(ref)
        try:
            outcome = self._deliver(ref)
        except BaseException:
            # the actor may still have queued messages
            self._ready.append(ref)
            raise
        finally:
            self._busy.discard(ref)
        self._turns += 1

        match outcome:
            case Processed(pending=True):
                self._ready.append(ref)
            case Failed():
                self._scheduled.discard(ref)
                logger.debug("Turn %d: %s failed", self._turns, ref)
                self._on_failure(outcome)
            case _:
                self._scheduled.discard(ref)
        return True

    def run_until_idle(self, max_turns: int | None = None) -> int:
        """Run turns until no actor has pending work.

        Parameters
        ----------
        max_turns : int | None
            Stop after this many turns even if work remains.

        Returns
        -------
        int
            Number of turns run.
        """
        ran = 0
        while max_turns is None or ran < max_turns:
            if not self.run_once():
                break
            ran += 1
        return ran

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Drain automatically on *loop* via ``call_soon`` callbacks."""
        self._loop = loop
        self._idle = asyncio.Event()
        if self._ready:
            self._arm()
        else:
            self._idle.set()

    def unbind(self) -> None:
        self._loop = None
        self._armed = False
        if self._idle is not None:
            self._idle.set()
        self._idle = None

    async def wait_idle(self) -> None:
        """Wait until the ready queue is empty.

        Raises
        ------
        ActorStateError
            If the dispatcher is not bound to an event loop.
        """
        if self._loop is None or self._idle is None:
            msg = "Dispatcher is not bound to an event loop"
            raise ActorStateError(msg)
        while self._ready or self._armed:
            await self._idle.wait()

    def _arm(self) -> None:
        if self._loop is None or self._armed:
            return
        self._armed = True
        if self._idle is not None:
            self._idle.clear()
        self._loop.call_soon(self._tick)

    def _tick(self) -> None:
        self._armed = False
        try:
            for _ in range(self._turns_per_tick):
                if not self.run_once():
                    break
        finally:
            if self._ready:
                self._arm()
            elif self._idle is not None:
                self._idle.set()
