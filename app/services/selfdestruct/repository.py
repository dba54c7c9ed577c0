from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.database import MessageView, SelfDestructRecord
from app.services.selfdestruct.ledger import InMemoryLedger, LedgerEntry, ViewSession


class SelfDestructRepository:
    """
    Database persistence for the self-destruct ledger.

    The pipelines are synchronous, so the HTTP layer loads the relevant
    rows into an InMemoryLedger/ViewSession snapshot, runs the pipeline and
    saves what changed.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_record(self, message_id: str) -> SelfDestructRecord | None:
        query = select(SelfDestructRecord).where(SelfDestructRecord.message_id == message_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def load_ledger(self, *message_ids: str) -> InMemoryLedger:
        """Snapshot the ledger entries for the given ids (unknown ids are skipped)."""
        entries = []
        for message_id in message_ids:
            record = await self.get_record(message_id)
            if record is not None:
                entries.append(
                    LedgerEntry(
                        message_id=record.message_id,
                        viewed=record.viewed,
                        created_at=record.created_at,
                        viewed_at=record.viewed_at,
                    )
                )
        return InMemoryLedger(entries)

    async def load_session(self, session_id: str | None, message_id: str | None) -> ViewSession:
        """Snapshot whether `session_id` already displayed `message_id`."""
        if session_id is None or message_id is None:
            return ViewSession(session_id)

        query = select(MessageView).where(
            MessageView.session_id == session_id,
            MessageView.message_id == message_id,
        )
        result = await self.db.execute(query)
        displayed = {message_id} if result.scalar_one_or_none() is not None else set()
        return ViewSession(session_id, displayed)

    async def save(self, ledger: InMemoryLedger, session: ViewSession | None = None) -> None:
        """Write changed ledger entries and newly displayed messages, then commit."""
        for entry in ledger.changed_entries():
            record = await self.get_record(entry.message_id)
            if record is None:
                self.db.add(
                    SelfDestructRecord(
                        message_id=entry.message_id,
                        viewed=entry.viewed,
                        created_at=entry.created_at,
                        viewed_at=entry.viewed_at,
                    )
                )
            else:
                record.viewed = entry.viewed
                record.viewed_at = entry.viewed_at

        if session is not None and session.session_id is not None:
            for message_id in session.newly_displayed():
                self.db.add(MessageView(message_id=message_id, session_id=session.session_id))

        await self.db.commit()
