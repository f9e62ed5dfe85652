"""In-memory issue repository"""

import asyncio
from collections import Counter
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..domain.errors import Conflict
from ..domain.issue import Issue
from .repository import IssueRepository, newest_first, page_bounds


class InMemoryIssueRepository(IssueRepository):
    """Dictionary-backed repository with the same contract as the SQL one.

    Snapshots are immutable, so they are stored and returned without copying.
    ``calls`` counts every operation, which lets callers check that a handler
    performed no write.
    """

    WRITE_OPERATIONS = ("create", "update", "archive")

    def __init__(self, issues: Optional[Iterable[Issue]] = None):
        self._issues: Dict[str, Issue] = {}
        self.calls: Counter = Counter()
        for issue in issues or ():
            self._issues[issue.id] = issue

    @property
    def write_count(self) -> int:
        return sum(self.calls[name] for name in self.WRITE_OPERATIONS)

    async def _enter(self, operation: str) -> None:
        self.calls[operation] += 1
        # Let concurrent callers interleave between operations, like real I/O
        await asyncio.sleep(0)

    async def create(self, issue: Issue) -> Issue:
        await self._enter("create")
        self._issues[issue.id] = issue
        return issue

    async def get_by_id(self, issue_id: str) -> Optional[Issue]:
        await self._enter("get_by_id")
        return self._issues.get(issue_id)

    async def update(self, issue: Issue) -> Optional[Issue]:
        await self._enter("update")
        current = self._issues.get(issue.id)
        if current is None:
            return None
        if current.is_archived:
            raise Conflict(issue.id)
        stored = replace(
            issue,
            is_archived=current.is_archived,
            archived_by=current.archived_by,
            archived_at=current.archived_at,
        )
        self._issues[issue.id] = stored
        return stored

    async def archive(self, issue_id: str, archived_by: str = "system") -> bool:
        await self._enter("archive")
        current = self._issues.get(issue_id)
        if current is None:
            return False
        self._issues[issue_id] = current.archive(archived_by)
        return True

    async def get_all(self) -> List[Issue]:
        await self._enter("get_all")
        return sorted(self._issues.values(), key=newest_first, reverse=True)

    async def get_all_paged(self, page: int, page_size: int) -> Tuple[Sequence[Issue], int]:
        await self._enter("get_all_paged")
        active = sorted(
            (issue for issue in self._issues.values() if not issue.is_archived),
            key=newest_first,
            reverse=True,
        )
        skip, limit = page_bounds(page, page_size)
        return active[skip:skip + limit], len(active)

    async def count(self) -> int:
        await self._enter("count")
        return len(self._issues)
