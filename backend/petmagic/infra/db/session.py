"""Request-scoped database sessions and transaction boundaries."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from petmagic.domain.common.errors import ConflictError, StoreError
from petmagic.infra.db.base import AsyncSessionLocal

logger = logging.getLogger(__name__)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one AsyncSession per request."""
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def transaction(
    session: AsyncSession, conflict_message: Optional[str] = None
) -> AsyncIterator[AsyncSession]:
    """Run the block as one unit of work: commit on success, roll back on any error.

    Integrity violations become ConflictError when conflict_message is given,
    other storage failures become StoreError. Domain errors pass through.
    """
    try:
        yield session
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if conflict_message is not None:
            logger.warning("Integrity conflict: %s", e.orig)
            raise ConflictError(conflict_message) from e
        logger.error("Store rejected write: %s", e.orig)
        raise StoreError() from e
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Store failure: %s", e)
        raise StoreError() from e
    except BaseException:
        await session.rollback()
        raise
