"""Handler for updating existing issues"""

import asyncio
from typing import Optional

from ..domain.commands import UpdateIssueCommand
from ..domain.errors import Conflict, NotFound
from ..domain.issue import Issue
from ..domain.validators import UpdateIssueValidator
from ..logging import get_logger
from ..storage.repository import IssueRepository
from .base import Handler, raise_if_cancelled

logger = get_logger("issuetrac.handlers.update")


class UpdateIssueHandler(Handler):
    """Edit the title and description of a non-archived issue"""

    def __init__(self, repository: IssueRepository, validator: Optional[UpdateIssueValidator] = None):
        super().__init__(repository)
        self._validator = validator or UpdateIssueValidator()

    async def handle(
        self, command: UpdateIssueCommand, cancel_event: Optional[asyncio.Event] = None
    ) -> Issue:
        self._validator.validate_or_raise(command)

        raise_if_cancelled(cancel_event)
        existing = await self._repository.get_by_id(command.id)
        if existing is None:
            raise NotFound(command.id)

        if existing.is_archived:
            logger.warning("issue_update_conflict", issue_id=command.id)
            raise Conflict(command.id)

        updated = existing.update(command.title, command.description)

        raise_if_cancelled(cancel_event)
        stored = await self._repository.update(updated)
        if stored is None:
            # Lost a race with a concurrent removal
            raise NotFound(command.id)

        logger.info("issue_updated", issue_id=stored.id)
        return stored
