"""Dead Letters: Listening for undeliverable messages.

Demonstrates:
- Subscribing an actor to DeadLetter events
- send() returning False for a stopped actor
- Stopping an actor with PoisonPill

Run with:
    uv run python examples/basics/03-dead-letters.py
"""

from actorlet import ActorSystem, DeadLetter, PoisonPill, receive


def main():
    with ActorSystem("dead-letters") as system:
        def on_dead_letter(ctx, msg):
            match msg:
                case DeadLetter(message, recipient):
                    print(f"[listener] {message!r} never reached {recipient}")

        listener = system.spawn(receive(on_dead_letter))
        system.subscribe(DeadLetter, listener)

        greeter = system.spawn(receive(lambda ctx, msg: print(f"[greeter] hello, {msg}")))
        system.send(greeter, "alice")
        system.send(greeter, PoisonPill())
        system.run_until_idle()

        delivered = system.send(greeter, "bob")
        print(f"send to stopped greeter returned {delivered}")
        system.run_until_idle()


if __name__ == "__main__":
    main()
