from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings, get_settings
from app.db.session import get_db_session
from app.services.selfdestruct.repository import SelfDestructRepository


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Database session dependency
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with get_db_session() as session:
        yield session

DbSessionDep = Annotated[AsyncSession, Depends(get_db)]


# Self-destruct ledger persistence
def get_repository(db: DbSessionDep) -> SelfDestructRepository:
    """Get a ledger repository bound to the request's session."""
    return SelfDestructRepository(db)

RepositoryDep = Annotated[SelfDestructRepository, Depends(get_repository)]
