"""Issues API endpoints"""

from fastapi import APIRouter, Depends, Path, Query, Request
from typing import Optional

from ..lifecycle.engine import IssueLifecycle
from ..models import Issue, MAX_ID
from .schemas import (
    IssueCreate,
    IssueUpdate,
    IssueResponse,
    IssueListResponse,
    ErrorResponse,
    UserResponse,
)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}

def get_lifecycle(request: Request) -> IssueLifecycle:
    """Lifecycle engine attached to the running app"""
    return request.app.state.lifecycle

def to_response(issue: Issue, lifecycle: IssueLifecycle) -> IssueResponse:
    """Build the wire representation, resolving the assignee"""
    user = lifecycle.find_assignee(issue)
    return IssueResponse(
        id=issue.id,
        title=issue.title,
        description=issue.description,
        status=issue.status.value,
        user=UserResponse.model_validate(user) if user else None,
        createdAt=issue.created_at,
        updatedAt=issue.updated_at,
    )

@router.post(
    "/issue",
    response_model=IssueResponse,
    response_model_exclude_none=True,
    status_code=201,
    responses=ERROR_RESPONSES,
)
async def create_issue(issue_data: IssueCreate, lifecycle: IssueLifecycle = Depends(get_lifecycle)):
    """Create a new issue"""
    issue = lifecycle.create_issue(
        title=issue_data.title,
        description=issue_data.description,
        assignee_id=issue_data.userId,
    )
    return to_response(issue, lifecycle)

@router.get(
    "/issues",
    response_model=IssueListResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def list_issues(
    status: Optional[str] = Query(None, description="Filter by status"),
    lifecycle: IssueLifecycle = Depends(get_lifecycle),
):
    """List issues, optionally filtered by status"""
    issues = lifecycle.list_issues(status)
    return IssueListResponse(issues=[to_response(issue, lifecycle) for issue in issues])

@router.get(
    "/issue/{issue_id}",
    response_model=IssueResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_issue(
    issue_id: int = Path(..., gt=0, le=MAX_ID),
    lifecycle: IssueLifecycle = Depends(get_lifecycle),
):
    """Get issue by ID"""
    return to_response(lifecycle.get_issue(issue_id), lifecycle)

@router.patch(
    "/issue/{issue_id}",
    response_model=IssueResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def update_issue(
    issue_data: IssueUpdate,
    issue_id: int = Path(..., gt=0, le=MAX_ID),
    lifecycle: IssueLifecycle = Depends(get_lifecycle),
):
    """Partially update an issue"""
    issue = lifecycle.update_issue(issue_id, issue_data.to_patch())
    return to_response(issue, lifecycle)
