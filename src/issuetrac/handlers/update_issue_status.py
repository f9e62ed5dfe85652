"""Handler for updating issue status"""

import asyncio
from typing import Optional

from ..domain.commands import UpdateIssueStatusCommand
from ..domain.errors import Conflict
from ..domain.issue import Issue, Status
from ..domain.validators import UpdateIssueStatusValidator
from ..logging import get_logger
from ..storage.repository import IssueRepository
from .base import Handler, raise_if_cancelled

logger = get_logger("issuetrac.handlers.status")


class UpdateIssueStatusHandler(Handler):
    """Move an issue to any status.

    A missing issue yields None rather than an exception. Archived issues are
    immutable here too, so a status change on one raises Conflict.
    """

    def __init__(
        self, repository: IssueRepository, validator: Optional[UpdateIssueStatusValidator] = None
    ):
        super().__init__(repository)
        self._validator = validator or UpdateIssueStatusValidator()

    async def handle(
        self, command: UpdateIssueStatusCommand, cancel_event: Optional[asyncio.Event] = None
    ) -> Optional[Issue]:
        self._validator.validate_or_raise(command)
        new_status = Status(command.status)

        raise_if_cancelled(cancel_event)
        existing = await self._repository.get_by_id(command.issue_id)
        if existing is None:
            return None

        if existing.is_archived:
            logger.warning("issue_status_conflict", issue_id=command.issue_id)
            raise Conflict(command.issue_id)

        updated = existing.update_status(new_status)
        if updated is existing:
            return existing

        raise_if_cancelled(cancel_event)
        stored = await self._repository.update(updated)
        if stored is not None:
            logger.info(
                "issue_status_changed",
                issue_id=stored.id,
                old_status=existing.status.value,
                new_status=stored.status.value,
            )
        return stored
