"""Death Watch: Observing a failing actor.

Demonstrates:
- Watching another actor with ctx.watch()
- Receiving Terminated when the watched actor's handler raises
- Other actors continuing to run after a failure
- Driving the system from an asyncio event loop

Run with:
    uv run python examples/basics/02-death-watch.py
"""

import asyncio
import logging
from dataclasses import dataclass

from actorlet import ActorRef, ActorSystem, Terminated, receive


@dataclass(frozen=True)
class Work:
    n: int


@dataclass(frozen=True)
class Observe:
    target: ActorRef


def worker(ctx, msg):
    match msg:
        case Work(n) if n < 0:
            raise ValueError(f"cannot process negative input: {n}")
        case Work(n):
            print(f"[worker] {n} squared is {n * n}")


def monitor(ctx, msg):
    match msg:
        case Observe(target):
            print(f"[monitor] watching {target}")
            ctx.watch(target)
        case Terminated(ref):
            print(f"[monitor] {ref} is gone")


async def main():
    logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")

    async with ActorSystem("death-watch") as system:
        w = system.spawn(receive(worker))
        m = system.spawn(receive(monitor))

        system.send(m, Observe(target=w))
        await system.wait_idle()

        system.send(w, Work(3))
        system.send(w, Work(-1))
        system.send(w, Work(4))
        await system.wait_idle()

        print(f"worker alive: {w in system}, monitor alive: {m in system}")


if __name__ == "__main__":
    asyncio.run(main())
