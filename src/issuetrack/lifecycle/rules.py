"""Ordered rules applied by an issue update.

Each rule receives the ``StagedUpdate`` and the repository, and either
raises one of the ``issuetrack.errors`` failures or adjusts the staged
values. Nothing touches the stored issue until every rule in
``UPDATE_RULES`` has passed; see ``StagedUpdate.commit``.

Precedence between the implicit status changes is fixed by position:
an explicit status beats promotion, and demotion beats both.
"""

from dataclasses import dataclass
from typing import Optional

from ..errors import BusinessRuleError, ImmutableStateError, ValidationError
from ..models import Issue, Status, TERMINAL_STATUSES, UNASSIGNED_STATUSES
from ..storage.repository import IssueRepository
from .patch import IssuePatch, is_present


@dataclass
class StagedUpdate:
    """Tentative field values for an issue, plus the state captured before the update"""

    patch: IssuePatch
    original_status: Status
    original_assignee_id: Optional[int]
    title: str
    description: str
    status: Status
    assignee_id: Optional[int]

    @classmethod
    def from_issue(cls, issue: Issue, patch: IssuePatch) -> "StagedUpdate":
        return cls(
            patch=patch,
            original_status=issue.status,
            original_assignee_id=issue.assignee_id,
            title=issue.title,
            description=issue.description,
            status=issue.status,
            assignee_id=issue.assignee_id,
        )

    def commit(self, issue: Issue):
        """Copy staged values onto ``issue``"""
        issue.title = self.title
        issue.description = self.description
        issue.status = self.status
        issue.assignee_id = self.assignee_id


def parse_status(value) -> Status:
    """Status member for ``value``, ValidationError if it is not one"""
    try:
        return Status(value)
    except ValueError:
        raise ValidationError("Invalid status value")


def reject_terminal_status(staged: StagedUpdate, repository: IssueRepository):
    if staged.original_status in TERMINAL_STATUSES:
        raise ImmutableStateError("Cannot update completed or cancelled issue")


def stage_title(staged: StagedUpdate, repository: IssueRepository):
    if not is_present(staged.patch.title):
        return
    title = staged.patch.title.strip()
    if not title:
        raise ValidationError("Title cannot be empty")
    staged.title = title


def stage_description(staged: StagedUpdate, repository: IssueRepository):
    if is_present(staged.patch.description):
        staged.description = staged.patch.description.strip()


def stage_assignee(staged: StagedUpdate, repository: IssueRepository):
    # Clearing is left to demote_on_unassignment so the assignee check
    # below still sees the current owner
    if not staged.patch.assigns_user:
        return
    if repository.find_user(staged.patch.assignee_id) is None:
        raise ValidationError("User not found")
    staged.assignee_id = staged.patch.assignee_id


def stage_status(staged: StagedUpdate, repository: IssueRepository):
    if is_present(staged.patch.status):
        staged.status = parse_status(staged.patch.status)


def require_assignee_for_active_status(staged: StagedUpdate, repository: IssueRepository):
    if staged.assignee_id is None and staged.status not in UNASSIGNED_STATUSES:
        raise BusinessRuleError("Cannot set status to IN_PROGRESS or COMPLETED without assignee")


def promote_on_assignment(staged: StagedUpdate, repository: IssueRepository):
    """Assigning an owner to a pending issue starts work, unless a status was given"""
    if (
        staged.original_status == Status.PENDING
        and staged.patch.assigns_user
        and not is_present(staged.patch.status)
    ):
        staged.status = Status.IN_PROGRESS


def demote_on_unassignment(staged: StagedUpdate, repository: IssueRepository):
    """Removing the owner always parks the issue back at PENDING"""
    if staged.original_assignee_id is not None and staged.patch.clears_assignee:
        staged.assignee_id = None
        staged.status = Status.PENDING


UPDATE_RULES = (
    reject_terminal_status,
    stage_title,
    stage_description,
    stage_assignee,
    stage_status,
    require_assignee_for_active_status,
    promote_on_assignment,
    demote_on_unassignment,
)
