"""Issues API endpoints"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ..domain.commands import (
    CreateIssueCommand,
    DeleteIssueCommand,
    GetIssueQuery,
    ListIssuesQuery,
    UpdateIssueCommand,
    UpdateIssueStatusCommand,
)
from ..handlers import (
    CreateIssueHandler,
    DeleteIssueHandler,
    GetIssueHandler,
    ListIssuesHandler,
    UpdateIssueHandler,
    UpdateIssueStatusHandler,
)
from ..storage import IssueRepository, SqlIssueRepository
from .schemas import (
    ErrorResponse,
    IssueCreate,
    IssueListResponse,
    IssueResponse,
    IssueStatusUpdate,
    IssueUpdate,
)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Bad input"},
    503: {"model": ErrorResponse, "description": "Storage temporarily unavailable"},
}


def get_repository() -> IssueRepository:
    """Repository used by the endpoints; overridden in tests"""
    return SqlIssueRepository()


@router.get("/", response_model=IssueListResponse, responses=ERROR_RESPONSES)
async def list_issues(
    page: int = Query(1, description="Page number, starting at 1"),
    page_size: int = Query(20, description="Items per page (1-100)"),
    repository: IssueRepository = Depends(get_repository),
):
    """List non-archived issues, newest first"""
    result = await ListIssuesHandler(repository).handle(ListIssuesQuery(page=page, page_size=page_size))
    return IssueListResponse.from_result(result)


@router.get("/all", response_model=List[IssueResponse], responses=ERROR_RESPONSES)
async def list_all_issues(repository: IssueRepository = Depends(get_repository)):
    """Every issue including archived ones, unpaginated"""
    issues = await GetIssueHandler(repository).handle_get_all()
    return [IssueResponse.from_domain(issue) for issue in issues]


@router.post("/", response_model=IssueResponse, status_code=201, responses=ERROR_RESPONSES)
async def create_issue(issue_data: IssueCreate, repository: IssueRepository = Depends(get_repository)):
    """Create a new issue"""
    command = CreateIssueCommand(
        title=issue_data.title,
        description=issue_data.description,
        labels=issue_data.labels,
    )
    issue = await CreateIssueHandler(repository).handle(command)
    return IssueResponse.from_domain(issue)


@router.get("/{issue_id}", response_model=IssueResponse, responses=ERROR_RESPONSES)
async def get_issue(issue_id: str, repository: IssueRepository = Depends(get_repository)):
    """Get issue by ID"""
    issue = await GetIssueHandler(repository).handle(GetIssueQuery(issue_id=issue_id))
    if not issue:
        raise HTTPException(status_code=404, detail=f"Issue {issue_id} not found")
    return IssueResponse.from_domain(issue)


@router.patch("/{issue_id}", response_model=IssueResponse, responses=ERROR_RESPONSES)
async def update_issue(
    issue_id: str,
    issue_data: IssueUpdate,
    repository: IssueRepository = Depends(get_repository),
):
    """Update title and description"""
    command = UpdateIssueCommand(id=issue_id, title=issue_data.title, description=issue_data.description)
    issue = await UpdateIssueHandler(repository).handle(command)
    return IssueResponse.from_domain(issue)


@router.patch("/{issue_id}/status", response_model=IssueResponse, responses=ERROR_RESPONSES)
async def update_issue_status(
    issue_id: str,
    status_data: IssueStatusUpdate,
    repository: IssueRepository = Depends(get_repository),
):
    """Move an issue to another status"""
    command = UpdateIssueStatusCommand(issue_id=issue_id, status=status_data.status)
    issue = await UpdateIssueStatusHandler(repository).handle(command)
    if not issue:
        raise HTTPException(status_code=404, detail=f"Issue {issue_id} not found")
    return IssueResponse.from_domain(issue)


@router.delete("/{issue_id}", status_code=204, responses=ERROR_RESPONSES)
async def delete_issue(issue_id: str, repository: IssueRepository = Depends(get_repository)):
    """Archive an issue; repeating the call is harmless"""
    await DeleteIssueHandler(repository).handle(DeleteIssueCommand(id=issue_id), actor="api")
    return Response(status_code=204)
