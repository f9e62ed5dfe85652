"""IssueTrac storage models package"""

from .base import Base, Status
from .label import LabelRecord
from .issue import IssueRecord

__all__ = [
    "Base",
    "Status",
    "IssueRecord",
    "LabelRecord",
]
