"""Handler for listing issues with pagination"""

import asyncio
from typing import Optional

from ..domain.commands import ListIssuesQuery, PagedResult
from ..domain.issue import Issue
from ..domain.validators import ListIssuesQueryValidator
from ..storage.repository import IssueRepository
from .base import Handler, raise_if_cancelled


class ListIssuesHandler(Handler):
    """Return one newest-first page of non-archived issues.

    Items and total come from the repository in one call but may be separate
    reads underneath, so concurrent inserts can make the total differ from the
    items by one; nothing here tries to hide that.
    """

    def __init__(self, repository: IssueRepository, validator: Optional[ListIssuesQueryValidator] = None):
        super().__init__(repository)
        self._validator = validator or ListIssuesQueryValidator()

    async def handle(
        self, query: ListIssuesQuery, cancel_event: Optional[asyncio.Event] = None
    ) -> PagedResult[Issue]:
        self._validator.validate_or_raise(query)

        raise_if_cancelled(cancel_event)
        items, total = await self._repository.get_all_paged(query.page, query.page_size)

        return PagedResult(
            items=list(items),
            total=total,
            page=query.page,
            page_size=query.page_size,
            total_pages=PagedResult.count_pages(total, query.page_size),
        )
