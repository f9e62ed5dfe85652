"""Repository contract the issue handlers depend on"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..domain.issue import Issue


class IssueRepository(ABC):
    """Persistence boundary for issue snapshots.

    Every operation may raise ``StorageUnavailable``; callers own any retry
    policy. Each write is atomic on its own, and there are no multi-issue
    transactions. Paged reads exclude archived issues and order them by
    ``created_at`` descending, then ``id`` descending, so pages never overlap.
    """

    @abstractmethod
    async def create(self, issue: Issue) -> Issue:
        """Store a new issue and return the stored snapshot"""

    @abstractmethod
    async def get_by_id(self, issue_id: str) -> Optional[Issue]:
        """Return the issue, or None when it does not exist"""

    @abstractmethod
    async def update(self, issue: Issue) -> Optional[Issue]:
        """Write the snapshot's editable fields and labels.

        Returns None when the target vanished and raises ``Conflict`` when the
        stored issue is archived. The archive columns are never written here.
        """

    @abstractmethod
    async def archive(self, issue_id: str, archived_by: str = "system") -> bool:
        """Mark the issue archived; False means the target vanished.

        An issue that is already archived is left untouched and reports True.
        """

    @abstractmethod
    async def get_all(self) -> List[Issue]:
        """Every issue, archived included, unpaginated"""

    @abstractmethod
    async def get_all_paged(self, page: int, page_size: int) -> Tuple[Sequence[Issue], int]:
        """One page of non-archived issues plus the total non-archived count"""

    @abstractmethod
    async def count(self) -> int:
        """Total number of stored issues, archived included"""


def page_bounds(page: int, page_size: int) -> Tuple[int, int]:
    """Return (skip, limit) for a 1-indexed page"""
    return (page - 1) * page_size, page_size


def newest_first(issue: Issue):
    """Sort key matching the paged ordering contract (use with reverse=True)"""
    return issue.created_at, issue.id
