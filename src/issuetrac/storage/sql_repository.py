"""SQLAlchemy implementation of the issue repository"""

import asyncio
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import desc, exists, func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..domain.errors import Conflict, StorageUnavailable
from ..domain.issue import Issue, utcnow
from ..logging import get_logger
from ..models import IssueRecord, LabelRecord
from ..models.base import to_db_time
from .database import get_db_session, get_session_factory
from .repository import IssueRepository, page_bounds

T = TypeVar("T")

logger = get_logger("issuetrac.storage")


class SqlIssueRepository(IssueRepository):
    """Issue repository backed by a SQL database.

    Every operation runs in its own session on a worker thread, so the event
    loop never blocks on the driver. Driver errors surface as
    ``StorageUnavailable`` and are not retried here.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    async def _run(self, operation: str, work: Callable[[Session], T]) -> T:
        return await asyncio.to_thread(self._run_sync, operation, work)

    def _run_sync(self, operation: str, work: Callable[[Session], T]) -> T:
        try:
            factory = self._session_factory or get_session_factory()
            with get_db_session(factory) as session:
                return work(session)
        except SQLAlchemyError as e:
            logger.error("storage_unavailable", operation=operation, error=str(e))
            raise StorageUnavailable(f"Repository {operation} failed: {e}") from e

    async def create(self, issue: Issue) -> Issue:
        def work(session: Session) -> Issue:
            record = IssueRecord.from_domain(issue)
            session.add(record)
            session.flush()
            return record.to_domain()

        return await self._run("create", work)

    async def get_by_id(self, issue_id: str) -> Optional[Issue]:
        def work(session: Session) -> Optional[Issue]:
            record = session.get(IssueRecord, issue_id)
            return record.to_domain() if record else None

        return await self._run("get_by_id", work)

    async def update(self, issue: Issue) -> Optional[Issue]:
        def work(session: Session) -> Optional[Issue]:
            # Archived rows never match, so a racing edit cannot clear the flag
            result = session.execute(
                update(IssueRecord)
                .where(IssueRecord.id == issue.id, IssueRecord.is_archived.is_(False))
                .values(
                    title=issue.title,
                    description=issue.description,
                    status=issue.status,
                    updated_at=to_db_time(issue.updated_at),
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                if not _exists(session, issue.id):
                    return None
                raise Conflict(issue.id)

            session.query(LabelRecord).filter(LabelRecord.issue_id == issue.id).delete(
                synchronize_session=False
            )
            session.add_all(LabelRecord.from_labels(issue.labels, issue_id=issue.id))
            session.flush()
            return session.get(IssueRecord, issue.id).to_domain()

        return await self._run("update", work)

    async def archive(self, issue_id: str, archived_by: str = "system") -> bool:
        now = to_db_time(utcnow())

        def work(session: Session) -> bool:
            result = session.execute(
                update(IssueRecord)
                .where(IssueRecord.id == issue_id, IssueRecord.is_archived.is_(False))
                .values(
                    is_archived=True,
                    archived_by=archived_by,
                    archived_at=now,
                    updated_at=now,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount > 0:
                return True
            # Already archived rows keep their original audit fields
            return _exists(session, issue_id)

        return await self._run("archive", work)

    async def get_all(self) -> List[Issue]:
        def work(session: Session) -> List[Issue]:
            records = session.query(IssueRecord).order_by(*_newest_first()).all()
            return [record.to_domain() for record in records]

        return await self._run("get_all", work)

    async def get_all_paged(self, page: int, page_size: int) -> Tuple[Sequence[Issue], int]:
        skip, limit = page_bounds(page, page_size)

        def work(session: Session) -> Tuple[Sequence[Issue], int]:
            query = session.query(IssueRecord).filter(IssueRecord.is_archived.is_(False))

            total = query.count()
            records = query.order_by(*_newest_first()).offset(skip).limit(limit).all()
            return [record.to_domain() for record in records], total

        return await self._run("get_all_paged", work)

    async def count(self) -> int:
        def work(session: Session) -> int:
            return session.query(func.count(IssueRecord.id)).scalar() or 0

        return await self._run("count", work)


def _newest_first():
    return desc(IssueRecord.created_at), desc(IssueRecord.id)


def _exists(session: Session, issue_id: str) -> bool:
    return session.query(exists().where(IssueRecord.id == issue_id)).scalar()
