"""Repository interface and the default in-memory store"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import Issue, Status, User, SEED_USERS


class IssueRepository(ABC):
    """Storage for users and issues.

    Holds no business rules: the lifecycle engine decides what is stored,
    the repository only assigns identifiers and answers lookups.
    """

    @abstractmethod
    def find_user(self, user_id: int) -> Optional[User]:
        """Get user by ID, None if absent"""
        ...

    @abstractmethod
    def find_issue(self, issue_id: int) -> Optional[Issue]:
        """Get issue by ID, None if absent.

        The returned issue is a mutable handle; changes become durable
        once passed to ``save_issue``.
        """
        ...

    @abstractmethod
    def create_issue(self, draft: Issue) -> Issue:
        """Assign the next unused identifier to ``draft``, store it and return the stored issue"""
        ...

    @abstractmethod
    def list_issues(self, status: Optional[Status] = None) -> List[Issue]:
        """All issues in insertion order, optionally only those with ``status``"""
        ...

    @abstractmethod
    def save_issue(self, issue: Issue) -> Issue:
        """Persist changes made to an issue obtained from ``find_issue``"""
        ...


class InMemoryRepository(IssueRepository):
    """Process-local store seeded with the default users"""

    def __init__(self, users: Optional[List[dict]] = None):
        seed = SEED_USERS if users is None else users
        self._users: Dict[int, User] = {u["id"]: User(id=u["id"], name=u["name"]) for u in seed}
        self._issues: Dict[int, Issue] = {}
        # Never decremented, so ids are not reused
        self._next_issue_id = 1

    def find_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def find_issue(self, issue_id: int) -> Optional[Issue]:
        return self._issues.get(issue_id)

    def create_issue(self, draft: Issue) -> Issue:
        draft.id = self._next_issue_id
        self._next_issue_id += 1
        self._issues[draft.id] = draft
        return draft

    def list_issues(self, status: Optional[Status] = None) -> List[Issue]:
        return [
            issue for issue in self._issues.values()
            if status is None or issue.status == status
        ]

    def save_issue(self, issue: Issue) -> Issue:
        # Handles returned by find_issue are the stored objects themselves
        self._issues[issue.id] = issue
        return issue
