"""Issue domain: snapshot entity, commands, validators and errors"""

from .issue import DEFAULT_LABEL_COLOR, Issue, Label, Status, utcnow
from .commands import (
    CreateIssueCommand,
    DeleteIssueCommand,
    GetIssueQuery,
    ListIssuesQuery,
    PagedResult,
    UpdateIssueCommand,
    UpdateIssueStatusCommand,
)
from .errors import (
    Conflict,
    FieldError,
    InvalidArgument,
    IssueTracError,
    NotFound,
    StorageUnavailable,
    ValidationFailed,
)
from .validators import (
    CreateIssueValidator,
    DeleteIssueValidator,
    ListIssuesQueryValidator,
    UpdateIssueStatusValidator,
    UpdateIssueValidator,
    ValidationResult,
)

__all__ = [
    "DEFAULT_LABEL_COLOR",
    "Issue",
    "Label",
    "Status",
    "utcnow",
    "CreateIssueCommand",
    "DeleteIssueCommand",
    "GetIssueQuery",
    "ListIssuesQuery",
    "PagedResult",
    "UpdateIssueCommand",
    "UpdateIssueStatusCommand",
    "Conflict",
    "FieldError",
    "InvalidArgument",
    "IssueTracError",
    "NotFound",
    "StorageUnavailable",
    "ValidationFailed",
    "CreateIssueValidator",
    "DeleteIssueValidator",
    "ListIssuesQueryValidator",
    "UpdateIssueStatusValidator",
    "UpdateIssueValidator",
    "ValidationResult",
]
