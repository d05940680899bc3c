"""TOML-based configuration for actorlet systems.

Provides ``load_config`` / ``discover_config`` for loading ``actorlet.toml``
and a small hierarchy of frozen dataclasses for dispatcher, dead-letter and
watch settings.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "ActorletConfig",
    "DeadLetterConfig",
    "DispatcherConfig",
    "WatchConfig",
    "discover_config",
    "load_config",
]

CONFIG_FILENAME = "actorlet.toml"


@dataclass(frozen=True)
class DispatcherConfig:
    """Dispatch loop tuning.

    Parameters
    ----------
    turns_per_tick : int
        Turns run per event-loop callback when the system is bound to a
        loop. Each turn still delivers at most one message to one actor.

    Examples
    --------
    >>> DispatcherConfig(turns_per_tick=16)
    DispatcherConfig(turns_per_tick=16)
    """

    turns_per_tick: int = 1

    def __post_init__(self) -> None:
        if self.turns_per_tick < 1:
            msg = f"turns_per_tick must be >= 1, got: {self.turns_per_tick}"
            raise ValueError(msg)


@dataclass(frozen=True)
class DeadLetterConfig:
    """Dead-letter handling.

    Parameters
    ----------
    log : bool
        Log every dead letter reaching the root actor.
    redirect_undelivered : bool
        Route messages still queued in a dying actor's mailbox to the root
        actor as dead letters instead of dropping them.

    Examples
    --------
    >>> DeadLetterConfig(redirect_undelivered=True)
    DeadLetterConfig(log=True, redirect_undelivered=True)
    """

    log: bool = True
    redirect_undelivered: bool = False


@dataclass(frozen=True)
class WatchConfig:
    """Death-watch policy.

    Parameters
    ----------
    strict : bool
        When ``True``, watching a dead or unknown actor raises
        ``UnknownActorError``. When ``False``, the watcher instead receives
        an immediate ``Terminated`` for the target.
    """

    strict: bool = True


@dataclass(frozen=True)
class ActorletConfig:
    """Top-level configuration container for an actor system.

    Parameters
    ----------
    system_name : str
        Logical name of the actor system, used in logger names.
    suppress_dead_letters_on_shutdown : bool
        Silence dead letters produced while the system shuts down.
    dispatcher : DispatcherConfig
        Dispatch loop tuning.
    dead_letters : DeadLetterConfig
        Dead-letter handling.
    watch : WatchConfig
        Death-watch policy.

    Examples
    --------
    >>> config = ActorletConfig(system_name="my-app")
    >>> config.watch.strict
    True
    """

    system_name: str = "actorlet"
    suppress_dead_letters_on_shutdown: bool = False
    dispatcher: DispatcherConfig = field(default_factory=DispatcherConfig)
    dead_letters: DeadLetterConfig = field(default_factory=DeadLetterConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)


def discover_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for ``actorlet.toml``.

    Parameters
    ----------
    start : Path | None
        Directory to start searching from.

    Returns
    -------
    Path | None
        Path to the discovered config file, or ``None`` if not found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(path: Path | None = None) -> ActorletConfig:
    """Load an ``ActorletConfig`` from a TOML file.

    If *path* is ``None``, auto-discovers ``actorlet.toml`` by walking up
    from the current working directory. Returns the default config if no
    file is found.

    Parameters
    ----------
    path : Path | None
        Explicit path to a TOML config file.

    Returns
    -------
    ActorletConfig

    Raises
    ------
    FileNotFoundError
        If an explicit *path* is given but does not exist.

    Examples
    --------
    >>> config = load_config(Path("actorlet.toml"))
    >>> config.system_name
    'actorlet'
    """
    if path is None:
        discovered = discover_config()
        if discovered is None:
            return ActorletConfig()
        path = discovered

    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open("rb") as f:
        raw = tomllib.load(f)

    system_raw = raw.get("system", {})
    return ActorletConfig(
        system_name=system_raw.get("name", "actorlet"),
        suppress_dead_letters_on_shutdown=system_raw.get(
            "suppress_dead_letters_on_shutdown", False
        ),
        dispatcher=DispatcherConfig(**raw.get("dispatcher", {})),
        dead_letters=DeadLetterConfig(**raw.get("dead_letters", {})),
        watch=WatchConfig(**raw.get("watch", {})),
    )
