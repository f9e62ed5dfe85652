"""Handler for deleting (archiving) issues"""

import asyncio
from typing import Optional

from ..domain.commands import DeleteIssueCommand
from ..domain.errors import NotFound
from ..domain.validators import DeleteIssueValidator
from ..logging import get_logger
from ..storage.repository import IssueRepository
from .base import Handler, raise_if_cancelled

logger = get_logger("issuetrac.handlers.delete")


class DeleteIssueHandler(Handler):
    """Archive an issue. "Delete" never removes the stored record.

    Archiving an already archived issue succeeds without writing, so
    ``updated_at`` is bumped only once.
    """

    def __init__(self, repository: IssueRepository, validator: Optional[DeleteIssueValidator] = None):
        super().__init__(repository)
        self._validator = validator or DeleteIssueValidator()

    async def handle(
        self,
        command: DeleteIssueCommand,
        actor: str = "system",
        cancel_event: Optional[asyncio.Event] = None,
    ) -> bool:
        self._validator.validate_or_raise(command)

        raise_if_cancelled(cancel_event)
        existing = await self._repository.get_by_id(command.id)
        if existing is None:
            raise NotFound(command.id)

        if existing.is_archived:
            logger.info("issue_already_archived", issue_id=command.id)
            return True

        raise_if_cancelled(cancel_event)
        if not await self._repository.archive(command.id, archived_by=actor):
            raise NotFound(command.id)

        logger.info("issue_archived", issue_id=command.id, actor=actor)
        return True
