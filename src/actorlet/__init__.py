from actorlet.actor import Actor, ActorContext, ActorFactory, FunctionActor, receive
from actorlet.config import (
    ActorletConfig,
    DeadLetterConfig,
    DispatcherConfig,
    WatchConfig,
    discover_config,
    load_config,
)
from actorlet.dispatcher import Dispatcher, Failed, Outcome, Processed, Skipped
from actorlet.errors import ActorletError, ActorStateError, UnknownActorError
from actorlet.events import (
    ActorFailed,
    ActorStopped,
    DeadLetter,
    EventStream,
    UnhandledMessage,
)
from actorlet.guardian import Guardian
from actorlet.mailbox import Mailbox
from actorlet.messages import PoisonPill, Terminated
from actorlet.ref import ActorRef
from actorlet.system import ActorRecord, ActorSystem

__all__ = [
    "Actor",
    "ActorContext",
    "ActorFactory",
    "ActorFailed",
    "ActorRecord",
    "ActorRef",
    "ActorStateError",
    "ActorStopped",
    "ActorSystem",
    "ActorletConfig",
    "ActorletError",
    "DeadLetter",
    "DeadLetterConfig",
    "Dispatcher",
    "DispatcherConfig",
    "EventStream",
    "Failed",
    "FunctionActor",
    "Guardian",
    "Mailbox",
    "Outcome",
    "PoisonPill",
    "Processed",
    "Skipped",
    "Terminated",
    "UnhandledMessage",
    "UnknownActorError",
    "WatchConfig",
    "discover_config",
    "load_config",
    "receive",
]
