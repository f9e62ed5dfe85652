"""Issue snapshot and its transition operations"""

import enum
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from .errors import InvalidArgument


DEFAULT_LABEL_COLOR = "#000000"


class Status(enum.Enum):
    """Issue status enumeration"""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_issue_id() -> str:
    return str(uuid.uuid4())


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


@dataclass(frozen=True)
class Label:
    """Label attached to an issue for categorization"""

    name: str
    color: str = DEFAULT_LABEL_COLOR

    def __post_init__(self):
        if _is_blank(self.name):
            raise InvalidArgument("Label name cannot be empty.")
        if _is_blank(self.color):
            raise InvalidArgument("Label color cannot be empty.")


@dataclass(frozen=True)
class Issue:
    """Immutable snapshot of a single issue.

    Status and archival are independent: archiving never touches ``status``,
    and ``is_archived`` only ever moves from False to True. Every transition
    returns a new snapshot; the receiver is never modified.
    """

    id: str
    title: str
    description: Optional[str]
    status: Status
    created_at: datetime
    updated_at: datetime
    labels: Tuple[Label, ...] = field(default_factory=tuple)
    is_archived: bool = False
    archived_by: Optional[str] = None
    archived_at: Optional[datetime] = None

    def __post_init__(self):
        if _is_blank(self.id):
            raise InvalidArgument("Issue ID cannot be empty.")
        if _is_blank(self.title):
            raise InvalidArgument("Issue title cannot be empty.")
        if not isinstance(self.status, Status):
            raise InvalidArgument(f"Invalid status: {self.status!r}")
        if self.updated_at < self.created_at:
            raise InvalidArgument("updated_at cannot be earlier than created_at.")
        # Accept any iterable of labels but always store a tuple
        object.__setattr__(self, "labels", tuple(self.labels or ()))

    @classmethod
    def create(
        cls,
        title: str,
        description: Optional[str] = None,
        labels: Optional[Iterable[Label]] = None,
    ) -> "Issue":
        """Create a new open, unarchived issue with a fresh id"""
        now = utcnow()
        return cls(
            id=new_issue_id(),
            title=title,
            description=description,
            status=Status.OPEN,
            created_at=now,
            updated_at=now,
            labels=tuple(labels or ()),
        )

    def _touch_time(self) -> datetime:
        # Clock skew must never put updated_at before created_at
        return max(utcnow(), self.created_at)

    def update_status(self, new_status: Status) -> "Issue":
        """Return a snapshot with ``new_status``; unchanged status is a no-op"""
        if self.status == new_status:
            return self
        return replace(self, status=new_status, updated_at=self._touch_time())

    def update(self, title: str, description: Optional[str]) -> "Issue":
        """Return a snapshot with a new title and description.

        Archival is not checked here; handlers decide whether an edit is allowed.
        """
        return replace(
            self,
            title=title,
            description=description,
            updated_at=self._touch_time(),
        )

    def archive(self, archived_by: str = "system") -> "Issue":
        """Return an archived snapshot; already archived issues are returned as is"""
        if self.is_archived:
            return self
        now = self._touch_time()
        return replace(
            self,
            is_archived=True,
            archived_by=archived_by,
            archived_at=now,
            updated_at=now,
        )

    def __repr__(self):
        return f"<Issue(id='{self.id}', title='{self.title[:50]}', status='{self.status.value}')>"
