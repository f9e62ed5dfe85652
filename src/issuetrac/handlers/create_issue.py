"""Handler for creating new issues"""

import asyncio
from typing import Optional

from ..config import get_default_label_color
from ..domain.commands import CreateIssueCommand
from ..domain.issue import Issue, Label
from ..domain.validators import CreateIssueValidator
from ..logging import get_logger
from ..storage.repository import IssueRepository
from .base import Handler, raise_if_cancelled

logger = get_logger("issuetrac.handlers.create")


class CreateIssueHandler(Handler):
    """Validate a create command, build a fresh issue and persist it.

    Creation never reads before writing, so it cannot conflict.
    """

    def __init__(
        self,
        repository: IssueRepository,
        validator: Optional[CreateIssueValidator] = None,
        label_color: Optional[str] = None,
    ):
        super().__init__(repository)
        self._validator = validator or CreateIssueValidator()
        self._label_color = label_color

    async def handle(
        self, command: CreateIssueCommand, cancel_event: Optional[asyncio.Event] = None
    ) -> Issue:
        self._validator.validate_or_raise(command)

        color = self._label_color or get_default_label_color()
        labels = [Label(name=name, color=color) for name in command.labels or ()]

        issue = Issue.create(
            title=command.title,
            description=command.description,
            labels=labels,
        )

        raise_if_cancelled(cancel_event)
        created = await self._repository.create(issue)
        logger.info("issue_created", issue_id=created.id, labels=len(created.labels))
        return created
