"""Opaque actor identity.

Provides ``ActorRef``, a frozen, ordered handle assigned by the actor system
at spawn time. Refs carry no behavior; messages go through the system.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_ID_PATTERN = re.compile(r"^ACTOR-(?P<serial>\d+)$")


@dataclass(frozen=True, order=True)
class ActorRef:
    """Identity of an actor, ordered by creation.

    Serials are assigned monotonically by ``ActorSystem.spawn`` and are never
    reused, so two refs compare equal only if they name the same actor.

    Parameters
    ----------
    serial : int
        Creation sequence number. The root actor owns ``0``.

    Examples
    --------
    >>> ref = ActorRef(3)
    >>> str(ref)
    'ACTOR-3'
    >>> ActorRef.parse("ACTOR-3") == ref
    True
    """

    serial: int

    @property
    def id(self) -> str:
        return f"ACTOR-{self.serial}"

    def __str__(self) -> str:
        return self.id

    @staticmethod
    def parse(raw: str) -> ActorRef:
        """Build a ref from its string id.

        Parameters
        ----------
        raw : str
            An id of the form ``ACTOR-<serial>``.

        Returns
        -------
        ActorRef

        Raises
        ------
        ValueError
            If *raw* is not a valid actor id.

        Examples
        --------
        >>> ActorRef.parse("ACTOR-999").serial
        999
        """
        match = _ID_PATTERN.match(raw)
        if match is None:
            msg = f"Invalid actor id: must look like 'ACTOR-<n>', got: {raw}"
            raise ValueError(msg)
        return ActorRef(int(match.group("serial")))
