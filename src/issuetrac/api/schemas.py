"""Pydantic schemas for API requests and responses"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.commands import PagedResult
from ..domain.issue import Issue


# Enums for API
class StatusEnum(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"


# Request schemas. Field rules live in the domain validators so that every
# violation is reported together with a 400 instead of FastAPI's 422.
class IssueCreate(BaseModel):
    """Schema for creating an issue"""
    title: str = Field(..., description="Issue title")
    description: Optional[str] = Field(None, description="Problem statement")
    labels: Optional[List[str]] = Field(None, description="Label names")


class IssueUpdate(BaseModel):
    """Schema for updating an issue"""
    title: str = Field(..., description="New title")
    description: Optional[str] = None


class IssueStatusUpdate(BaseModel):
    """Schema for changing issue status"""
    status: str = Field(..., description="One of: open, in_progress, closed")


# Response schemas
class LabelResponse(BaseModel):
    name: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class IssueResponse(BaseModel):
    """Schema for issue responses"""
    id: str
    title: str
    description: Optional[str] = None
    status: StatusEnum
    labels: List[LabelResponse] = []
    is_archived: bool
    archived_by: Optional[str] = None
    archived_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, issue: Issue) -> "IssueResponse":
        return cls(
            id=issue.id,
            title=issue.title,
            description=issue.description,
            status=StatusEnum(issue.status.value),
            labels=[LabelResponse.model_validate(label) for label in issue.labels],
            is_archived=issue.is_archived,
            archived_by=issue.archived_by,
            archived_at=issue.archived_at,
            created_at=issue.created_at,
            updated_at=issue.updated_at,
        )


class IssueListResponse(BaseModel):
    """Schema for paginated issue list responses"""
    items: List[IssueResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_result(cls, result: PagedResult[Issue]) -> "IssueListResponse":
        return cls(
            items=[IssueResponse.from_domain(issue) for issue in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )


# Common response schemas
class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Schema for error responses"""
    detail: str
    status_code: int
    errors: Optional[List[FieldErrorResponse]] = None
