"""Parent-Child: Actor hierarchy with ctx.spawn().

Demonstrates:
- A parent spawning children from its handler
- Children stopping before their parent
- Lifecycle hooks pre_start and post_stop

Run with:
    uv run python examples/basics/04-parent-child.py
"""

from actorlet import Actor, ActorContext, ActorSystem


class Child(Actor):
    def __init__(self, ctx: ActorContext, name: str):
        super().__init__(ctx)
        self.name = name

    def pre_start(self):
        print(f"[{self.name}] started as {self.ref}")

    def on_receive(self, message):
        print(f"[{self.name}] got {message!r}")

    def post_stop(self):
        print(f"[{self.name}] stopped")


class Parent(Actor):
    def on_receive(self, message):
        match message:
            case ("spawn", name):
                self.context.spawn(lambda ctx: Child(ctx, name))
            case ("broadcast", payload):
                for child in self.context.children:
                    self.context.send(child, payload)
            case _:
                self.unhandled(message)

    def post_stop(self):
        print("[parent] stopped")


def main():
    with ActorSystem("family") as system:
        parent = system.spawn(Parent)

        for name in ("anna", "ben"):
            system.send(parent, ("spawn", name))
        system.send(parent, ("broadcast", "dinner is ready"))
        system.run_until_idle()

        system.stop(parent)


if __name__ == "__main__":
    main()
