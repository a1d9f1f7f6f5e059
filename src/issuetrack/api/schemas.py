"""Pydantic schemas for API requests and responses"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from ..lifecycle.patch import IssuePatch
from ..models import MAX_ID

# Enums for API
class StatusEnum(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

# Issue schemas
class IssueCreate(BaseModel):
    """Schema for creating an issue"""
    title: Optional[str] = Field(None, description="Issue title, required after trimming")
    description: Optional[str] = Field(None, description="Issue description")
    userId: Optional[int] = Field(None, ge=0, le=MAX_ID, description="Assignee user ID")

class IssueUpdate(BaseModel):
    """Schema for partially updating an issue.

    Fields left out of the body are left unchanged. ``userId: null`` clears
    the assignee; ``userId: 0`` is accepted as the legacy spelling of that.
    ``null`` for any other field is treated as if the field were left out.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    # Validated by the lifecycle rules, not here, so errors keep rule order
    status: Optional[str] = None
    userId: Optional[int] = Field(None, ge=0, le=MAX_ID)

    def to_patch(self) -> IssuePatch:
        """Convert the supplied fields into an IssuePatch"""
        supplied = {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field == "userId"
        }
        if "userId" in supplied:
            user_id = supplied.pop("userId")
            supplied["assignee_id"] = None if user_id == 0 else user_id
        return IssuePatch(**supplied)

class UserResponse(BaseModel):
    """Schema for user responses"""
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)

class IssueResponse(BaseModel):
    """Schema for issue responses"""
    id: int
    title: str
    description: str
    status: StatusEnum
    user: Optional[UserResponse] = None
    createdAt: datetime
    updatedAt: datetime

class IssueListResponse(BaseModel):
    """Schema for issue list responses"""
    issues: List[IssueResponse]

class ErrorResponse(BaseModel):
    """Schema for error responses; code mirrors the HTTP status"""
    error: str
    code: int
