"""Error taxonomy raised by the issue handlers"""

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class FieldError:
    """A single violated rule, scoped to the field it applies to"""

    field: str
    message: str

    def to_dict(self):
        return {"field": self.field, "message": self.message}


class IssueTracError(Exception):
    """Base class for every failure surfaced by the core"""


class InvalidArgument(IssueTracError, ValueError):
    """A malformed identifier or field was passed directly to the core"""


class ValidationFailed(IssueTracError):
    """One or more field rules were violated.

    Carries every collected error, not just the first one.
    """

    def __init__(self, errors: Iterable[FieldError]):
        self.errors: List[FieldError] = list(errors)
        summary = "; ".join(f"{error.field}: {error.message}" for error in self.errors)
        super().__init__(f"Validation failed: {summary}")

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]


class NotFound(IssueTracError):
    """The referenced issue does not exist"""

    def __init__(self, issue_id: str, message: Optional[str] = None):
        self.issue_id = issue_id
        super().__init__(message or f"Issue {issue_id} not found")


class Conflict(IssueTracError):
    """A mutation was attempted on an archived issue"""

    def __init__(self, issue_id: str, message: Optional[str] = None):
        self.issue_id = issue_id
        super().__init__(message or f"Issue {issue_id} is archived and cannot be modified")


class StorageUnavailable(IssueTracError):
    """A repository call failed for infrastructure reasons"""
