"""Ping-Pong: Two actors bouncing a message back and forth.

Demonstrates:
- Spawning actors from an Actor subclass
- Replying through a ref carried in the message
- Bounding an endless exchange with run_until_idle(max_turns=...)

Run with:
    uv run python examples/basics/01-ping-pong.py
"""

import logging
from dataclasses import dataclass
from typing import Any

from actorlet import Actor, ActorContext, ActorRef, ActorSystem


@dataclass(frozen=True)
class Ping:
    """Ball carrying the ref to bounce it back to."""

    reply_to: ActorRef


class Paddle(Actor):
    """Prints its label and returns the ball."""

    def __init__(self, ctx: ActorContext, label: str) -> None:
        super().__init__(ctx)
        self.label = label

    def on_receive(self, message: Any) -> None:
        match message:
            case Ping(reply_to):
                print(f"[{self.ref}] {self.label}")
                self.context.send(reply_to, Ping(reply_to=self.ref))
            case _:
                self.unhandled(message)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=" * 50)
    print("actorlet Ping-Pong Example")
    print("=" * 50)
    print()

    with ActorSystem("ping-pong") as system:
        ping = system.spawn(lambda ctx: Paddle(ctx, "PING"))
        pong = system.spawn(lambda ctx: Paddle(ctx, "PONG"))

        system.send(ping, Ping(reply_to=pong))

        # The exchange never ends on its own
        turns = system.run_until_idle(max_turns=10)
        print()
        print(f"Ran {turns} turns, {system.dispatcher.pending()} actor(s) still ready")

    print()
    print("=" * 50)
    print("Done!")
    print("=" * 50)


if __name__ == "__main__":
    main()
