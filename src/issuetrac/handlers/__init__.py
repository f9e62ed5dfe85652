"""Command and query handlers for issues"""

from .create_issue import CreateIssueHandler
from .delete_issue import DeleteIssueHandler
from .get_issue import GetIssueHandler
from .list_issues import ListIssuesHandler
from .update_issue import UpdateIssueHandler
from .update_issue_status import UpdateIssueStatusHandler

__all__ = [
    "CreateIssueHandler",
    "DeleteIssueHandler",
    "GetIssueHandler",
    "ListIssuesHandler",
    "UpdateIssueHandler",
    "UpdateIssueStatusHandler",
]
