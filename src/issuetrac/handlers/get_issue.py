"""Handler for retrieving issues"""

import asyncio
from typing import List, Optional

from ..domain.commands import GetIssueQuery
from ..domain.errors import InvalidArgument
from ..domain.issue import Issue
from .base import Handler, raise_if_cancelled


class GetIssueHandler(Handler):
    """Pure lookups: a single issue by id, or every issue unfiltered"""

    async def handle(
        self, query: GetIssueQuery, cancel_event: Optional[asyncio.Event] = None
    ) -> Optional[Issue]:
        """Return the issue or None when it does not exist"""
        if not query.issue_id or not query.issue_id.strip():
            raise InvalidArgument("Issue ID cannot be empty.")

        raise_if_cancelled(cancel_event)
        return await self._repository.get_by_id(query.issue_id)

    async def handle_get_all(self, cancel_event: Optional[asyncio.Event] = None) -> List[Issue]:
        """Every issue, archived included, without pagination.

        Only meant for small admin views; use ListIssuesHandler otherwise.
        """
        raise_if_cancelled(cancel_event)
        return await self._repository.get_all()
