"""Deferred transitions keyed to the simulation clock."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass(order=True)
class ScheduledTransition:
    fire_at: float
    sequence: int
    epoch: int = field(compare=False)
    name: str = field(compare=False)
    action: Callable[[], None] = field(compare=False, repr=False)


class TransitionScheduler:
    """Ordered list of ``(fire_at, epoch, transition)`` entries.

    Nothing runs on its own; the owner pulls due entries during its tick and
    decides whether their epoch is still current.
    """

    def __init__(self) -> None:
        self._entries: List[ScheduledTransition] = []
        self._sequence = 0

    def __len__(self) -> int:
        return len(self._entries)

    def schedule(
        self,
        now: float,
        delay: float,
        epoch: int,
        name: str,
        action: Callable[[], None],
    ) -> ScheduledTransition:
        self._sequence += 1
        entry = ScheduledTransition(
            fire_at=now + max(0.0, delay),
            sequence=self._sequence,
            epoch=epoch,
            name=name,
            action=action,
        )
        self._entries.append(entry)
        self._entries.sort()
        return entry

    def pending(self, name: str) -> bool:
        return any(entry.name == name for entry in self._entries)

    def pop_due(self, now: float) -> List[ScheduledTransition]:
        due = [entry for entry in self._entries if entry.fire_at <= now]
        if due:
            self._entries = [entry for entry in self._entries if entry.fire_at > now]
        return due

    def clear(self) -> None:
        self._entries.clear()


__all__ = ["ScheduledTransition", "TransitionScheduler"]
