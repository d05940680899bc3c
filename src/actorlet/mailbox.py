"""Per-actor message queue.

An unbounded FIFO owned by exactly one actor record. Only the actor system
puts into it and only the dispatcher's delivery step pops from it.
"""

from __future__ import annotations

from collections import deque


class Mailbox[M]:
    """Unbounded FIFO of pending messages.

    Examples
    --------
    >>> mb = Mailbox[str]()
    >>> mb.put("a")
    >>> mb.put("b")
    >>> mb.pop()
    'a'
    """

    def __init__(self) -> None:
        self._queue: deque[M] = deque()

    def put(self, msg: M) -> None:
        self._queue.append(msg)

    def pop(self) -> M:
        """Remove and return the oldest message.

        Raises
        ------
        IndexError
            If the mailbox is empty.
        """
        return self._queue.popleft()

    def drain(self) -> list[M]:
        """Remove and return every pending message, oldest first."""
        pending = list(self._queue)
        self._queue.clear()
        return pending

    def size(self) -> int:
        return len(self._queue)

    def empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)
