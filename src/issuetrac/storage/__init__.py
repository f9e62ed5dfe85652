"""Issue persistence: repository contract and implementations"""

from .repository import IssueRepository
from .memory_repository import InMemoryIssueRepository
from .sql_repository import SqlIssueRepository

__all__ = ["IssueRepository", "InMemoryIssueRepository", "SqlIssueRepository"]
