from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol


class SelfDestructLedger(Protocol):
    """
    Key-value store of self-destructing message ids.

    Implementations must give read-after-write consistency: once
    mark_viewed() returns, is_viewed() reports True for that id.
    """

    def register(self, message_id: str) -> None:
        ...

    def is_viewed(self, message_id: str) -> bool:
        ...

    def mark_viewed(self, message_id: str) -> bool:
        ...


@dataclass
class LedgerEntry:
    """One self-destructing message as tracked by the ledger."""

    message_id: str
    viewed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    viewed_at: datetime | None = None


class InMemoryLedger:
    """
    Dictionary-backed ledger.

    Also serves as the unit of work for the database repository: entries
    are loaded into it, the pipeline runs against it, and changed entries
    are written back.
    """

    def __init__(self, entries: list[LedgerEntry] | None = None):
        self._entries: dict[str, LedgerEntry] = {e.message_id: e for e in entries or []}
        self._changed: set[str] = set()

    def register(self, message_id: str) -> None:
        """Start tracking a new message as not yet viewed."""
        self._entries[message_id] = LedgerEntry(message_id=message_id)
        self._changed.add(message_id)

    def is_viewed(self, message_id: str) -> bool:
        """Unknown ids count as not viewed."""
        entry = self._entries.get(message_id)
        return entry.viewed if entry else False

    def mark_viewed(self, message_id: str) -> bool:
        """
        Mark a message viewed.

        Returns:
            True if the id is known (whether or not it was already viewed),
            False for unknown ids
        """
        entry = self._entries.get(message_id)
        if entry is None:
            return False

        if not entry.viewed:
            entry.viewed = True
            entry.viewed_at = datetime.now(timezone.utc)
            self._changed.add(message_id)
        return True

    def get(self, message_id: str) -> LedgerEntry | None:
        return self._entries.get(message_id)

    def changed_entries(self) -> list[LedgerEntry]:
        """Entries registered or marked since construction."""
        return [self._entries[message_id] for message_id in sorted(self._changed)]


class ViewSession:
    """Message ids a single client session has already displayed."""

    def __init__(self, session_id: str | None = None, displayed: set[str] | None = None):
        self.session_id = session_id
        self._displayed: set[str] = set(displayed or ())
        self._new: set[str] = set()

    def has_displayed(self, message_id: str) -> bool:
        return message_id in self._displayed

    def record_displayed(self, message_id: str) -> None:
        if message_id not in self._displayed:
            self._displayed.add(message_id)
            self._new.add(message_id)

    def newly_displayed(self) -> list[str]:
        return sorted(self._new)
