"""Label model for issue tagging"""

from typing import Iterable, List, Optional

from sqlalchemy import Column, ForeignKey, Integer, String

from ..domain.issue import Label
from .base import Base


class LabelRecord(Base):
    """Label attached to an issue.

    Rows keep their insertion position; duplicate names on one issue are allowed.
    """

    __tablename__ = "issue_labels"

    id = Column(Integer, primary_key=True, autoincrement=True)
    issue_id = Column(String(64), ForeignKey("issues.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(100), nullable=False)
    color = Column(String(32), nullable=False)

    def __repr__(self):
        return f"<LabelRecord(issue='{self.issue_id}', name='{self.name}')>"

    @classmethod
    def from_labels(cls, labels: Iterable[Label], issue_id: Optional[str] = None) -> List["LabelRecord"]:
        return [
            cls(issue_id=issue_id, position=position, name=label.name, color=label.color)
            for position, label in enumerate(labels)
        ]

    def to_domain(self) -> Label:
        return Label(name=self.name, color=self.color)
