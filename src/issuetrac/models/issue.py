"""Issue model"""

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, String, Text
from sqlalchemy.orm import relationship

from ..domain.issue import Issue
from .base import Base, Status, from_db_time, to_db_time
from .label import LabelRecord


class IssueRecord(Base):
    """Stored form of an issue snapshot"""

    __tablename__ = "issues"

    # Primary fields
    id = Column(String(64), primary_key=True)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=True)

    # Status and archival are independent columns
    status = Column(Enum(Status), nullable=False, default=Status.OPEN)
    is_archived = Column(Boolean, nullable=False, default=False)
    archived_by = Column(String(100), nullable=True)
    archived_at = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    labels = relationship(
        LabelRecord,
        order_by=LabelRecord.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    # Listing filters on is_archived and sorts newest first
    __table_args__ = (
        Index("ix_issues_archived_created", "is_archived", "created_at", "id"),
    )

    def __repr__(self):
        return f"<IssueRecord(id='{self.id}', title='{self.title[:50]}', status='{self.status.value}')>"

    @classmethod
    def from_domain(cls, issue: Issue) -> "IssueRecord":
        record = cls(id=issue.id)
        record.apply(issue)
        return record

    def apply(self, issue: Issue) -> None:
        """Overwrite every mutable column with the snapshot's values"""
        self.title = issue.title
        self.description = issue.description
        self.status = issue.status
        self.is_archived = issue.is_archived
        self.archived_by = issue.archived_by
        self.archived_at = to_db_time(issue.archived_at)
        self.created_at = to_db_time(issue.created_at)
        self.updated_at = to_db_time(issue.updated_at)
        self.labels = LabelRecord.from_labels(issue.labels)

    def to_domain(self) -> Issue:
        return Issue(
            id=self.id,
            title=self.title,
            description=self.description,
            status=self.status,
            created_at=from_db_time(self.created_at),
            updated_at=from_db_time(self.updated_at),
            labels=tuple(label.to_domain() for label in self.labels),
            is_archived=bool(self.is_archived),
            archived_by=self.archived_by,
            archived_at=from_db_time(self.archived_at),
        )
