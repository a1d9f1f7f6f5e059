"""Issue lifecycle engine: creation, lookup and the update state machine"""

import json
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..errors import NotFoundError, ValidationError
from ..models import Issue, Status
from ..storage.repository import IssueRepository
from .patch import IssuePatch
from .rules import UPDATE_RULES, StagedUpdate, parse_status

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IssueLifecycle:
    """Applies validation and status rules on top of a repository.

    A single re-entrant lock serializes every operation, so concurrent
    updates to one issue cannot interleave and readers never see a
    half-committed update.
    """

    def __init__(self, repository: IssueRepository, clock: Optional[Callable[[], datetime]] = None):
        self.repository = repository
        self._clock = clock or utcnow
        self._lock = threading.RLock()

    def create_issue(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        assignee_id: Optional[int] = None,
    ) -> Issue:
        """Create a new issue.

        The status is derived, never supplied: IN_PROGRESS when an assignee
        is given, PENDING otherwise.
        """
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")

        status = Status.PENDING
        with self._lock:
            if assignee_id is not None:
                if self.repository.find_user(assignee_id) is None:
                    raise ValidationError("User not found")
                status = Status.IN_PROGRESS

            now = self._clock()
            issue = self.repository.create_issue(Issue(
                title=title,
                description=(description or "").strip(),
                status=status,
                assignee_id=assignee_id,
                created_at=now,
                updated_at=now,
            ))

        logger.info("Created issue %s with status %s", issue.id, issue.status.value)
        logger.debug("Issue %s created: %s", issue.id, json.dumps(issue.to_dict()))
        return issue

    def get_issue(self, issue_id: int) -> Issue:
        """Get issue by ID, NotFoundError if absent"""
        with self._lock:
            issue = self.repository.find_issue(issue_id)
        if issue is None:
            raise NotFoundError("Issue not found")
        return issue

    def list_issues(self, status_filter: Optional[str] = None) -> List[Issue]:
        """List issues, optionally only those whose status equals ``status_filter``"""
        status = parse_status(status_filter) if status_filter else None
        with self._lock:
            return self.repository.list_issues(status)

    def update_issue(self, issue_id: int, patch: IssuePatch) -> Issue:
        """Apply ``patch`` to an issue.

        Runs ``UPDATE_RULES`` in order against staged values; the first
        failing rule aborts the update and leaves the stored issue as it was.
        """
        with self._lock:
            issue = self.repository.find_issue(issue_id)
            if issue is None:
                raise NotFoundError("Issue not found")

            before = issue.to_dict()
            staged = StagedUpdate.from_issue(issue, patch)
            for rule in UPDATE_RULES:
                rule(staged, self.repository)

            staged.commit(issue)
            issue.updated_at = self._clock()
            issue = self.repository.save_issue(issue)

        logger.info(
            "Updated issue %s: status %s -> %s, assignee %s -> %s",
            issue.id,
            staged.original_status.value,
            issue.status.value,
            staged.original_assignee_id,
            issue.assignee_id,
        )
        logger.debug(
            "Issue %s changed from %s to %s",
            issue.id, json.dumps(before), json.dumps(issue.to_dict()),
        )
        return issue

    def find_assignee(self, issue: Issue):
        """User assigned to ``issue``, None when unassigned"""
        if issue.assignee_id is None:
            return None
        return self.repository.find_user(issue.assignee_id)
