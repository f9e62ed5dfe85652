"""Command and query objects accepted by the handlers"""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Sequence, TypeVar, Union

from .issue import Status

T = TypeVar("T")


@dataclass(frozen=True)
class CreateIssueCommand:
    title: str
    description: Optional[str] = None
    labels: Optional[List[str]] = None


@dataclass(frozen=True)
class UpdateIssueCommand:
    id: str
    title: str
    description: Optional[str] = None


@dataclass(frozen=True)
class UpdateIssueStatusCommand:
    issue_id: str
    # Either a Status member or its string value; the validator checks membership
    status: Union[Status, str]


@dataclass(frozen=True)
class DeleteIssueCommand:
    id: str


@dataclass(frozen=True)
class ListIssuesQuery:
    page: int = 1
    page_size: int = 20


@dataclass(frozen=True)
class GetIssueQuery:
    issue_id: str


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """One page of results plus the totals needed to navigate the rest"""

    items: Sequence[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20
    total_pages: int = 0

    @staticmethod
    def count_pages(total: int, page_size: int) -> int:
        if total <= 0:
            return 0
        return math.ceil(total / page_size)
