"""
Sink records and the sink table.

Removal only tombstones a sink; the table is rebuilt once tombstones make
up at least half of its entries. All per-sink operations go through
for_each_live(), which targets one sink by id or, with id=None, every
live sink.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .accept import AcceptSet
from .levels import LevelRegistry


@dataclass
class Sink:
    """A named destination for log records.

    Attributes:
        id: Identifier, unique among live sinks
        writer: Callable receiving a LogRecord
        accept: Levels this sink listens to
        log_id: Whether records should carry the sink id for display
        deleted: Tombstone flag, set by SinkTable.remove()
    """
    id: str
    writer: Callable
    accept: AcceptSet
    log_id: bool = False
    deleted: bool = False


class SinkTable:
    """Ordered collection of sinks with tombstone removal."""

    def __init__(self, registry: LevelRegistry):
        self._registry = registry
        self._entries: List[Sink] = []
        self._deleted = 0

    def add(self, sink_id: str, writer: Callable,
            level_names: Optional[Iterable[str]] = None,
            log_id: bool = False) -> bool:
        """Append a new sink.

        level_names=None subscribes the sink to every level defined right
        now. Levels defined later are not added automatically.

        Returns:
            False if a live sink already uses sink_id (nothing added).
        """
        if self.find(sink_id) is not None:
            return False
        if level_names is None:
            level_names = self._registry.names()
        accept = AcceptSet.build(level_names, self._registry)
        self._entries.append(Sink(sink_id, writer, accept, bool(log_id)))
        return True

    def remove(self, sink_id: str) -> None:
        """Tombstone a live sink; compact when half the table is dead."""
        sink = self.find(sink_id)
        if sink is None:
            return
        sink.deleted = True
        self._deleted += 1
        if self._deleted >= len(self._entries) / 2:
            self.compact()

    def compact(self) -> None:
        """Drop tombstoned entries and reset the tombstone count."""
        self._entries = [s for s in self._entries if not s.deleted]
        self._deleted = 0

    def find(self, sink_id: str) -> Optional[Sink]:
        for sink in self._entries:
            if sink.id == sink_id and not sink.deleted:
                return sink
        return None

    def for_each_live(self, sink_id: Optional[str],
                      action: Callable[[Sink], None]) -> None:
        """Apply action to one live sink, or to all when sink_id is None."""
        if sink_id is None:
            for sink in list(self._entries):
                if not sink.deleted:
                    action(sink)
            return
        sink = self.find(sink_id)
        if sink is not None:
            action(sink)

    def live(self) -> List[Sink]:
        return [s for s in self._entries if not s.deleted]

    @property
    def tombstones(self) -> int:
        return self._deleted

    def __len__(self) -> int:
        """Physical length, tombstones included."""
        return len(self._entries)
