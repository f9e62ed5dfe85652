"""Shared pieces of the issue handlers"""

import asyncio
from typing import Optional

from ..storage.repository import IssueRepository


def raise_if_cancelled(cancel_event: Optional[asyncio.Event]) -> None:
    """Honor a caller's cancellation request before the next repository call"""
    if cancel_event is not None and cancel_event.is_set():
        raise asyncio.CancelledError()


class Handler:
    """Base class for handlers: stateless apart from their collaborators"""

    def __init__(self, repository: IssueRepository):
        self._repository = repository
