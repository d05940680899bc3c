"""Auto-generate API reference pages from actorlet.__all__.

Each public symbol is mapped to a reference page based on its source module,
so a newly exported name shows up on the next mkdocs build.
"""

from __future__ import annotations

import types
from collections import defaultdict

import mkdocs_gen_files

import actorlet

MODULE_TO_PAGE: dict[str, tuple[str, str]] = {
    "actorlet.actor": ("reference/actor.md", "Actors"),
    "actorlet.ref": ("reference/ref.md", "ActorRef"),
    "actorlet.system": ("reference/system.md", "ActorSystem"),
    "actorlet.guardian": ("reference/system.md", "ActorSystem"),
    "actorlet.mailbox": ("reference/mailbox.md", "Mailbox"),
    "actorlet.dispatcher": ("reference/dispatcher.md", "Dispatcher"),
    "actorlet.messages": ("reference/messages.md", "System Messages"),
    "actorlet.events": ("reference/events.md", "Events"),
    "actorlet.errors": ("reference/errors.md", "Errors"),
    "actorlet.config": ("reference/config.md", "Configuration"),
}

pages: dict[str, list[str]] = defaultdict(list)
titles: dict[str, str] = {}

for name in actorlet.__all__:
    obj = getattr(actorlet, name)

    if isinstance(obj, types.ModuleType):
        continue

    module = getattr(obj, "__module__", None)
    if module is None:
        continue

    page_info = MODULE_TO_PAGE.get(module)
    if page_info is None:
        msg = f"actorlet.__all__ exports '{name}' from unmapped module '{module}'"
        raise ValueError(msg)

    page_path, title = page_info
    pages[page_path].append(name)
    titles[page_path] = title

for page_path, symbols in sorted(pages.items()):
    with mkdocs_gen_files.open(page_path, "w") as f:
        f.write(f"# {titles[page_path]}\n")
        for sym in symbols:
            f.write(f"\n::: actorlet.{sym}\n")
