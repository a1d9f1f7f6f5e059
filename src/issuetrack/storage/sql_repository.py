"""SQLAlchemy-backed repository"""

from typing import List, Optional

from ..models import Issue, MAX_ID, Status, User
from .database import get_db_session
from .repository import IssueRepository


def in_id_range(value: int) -> bool:
    """True for ids an INTEGER primary key can hold"""
    return 0 < value <= MAX_ID


class SqlAlchemyRepository(IssueRepository):
    """Repository persisting users and issues through SQLAlchemy.

    Every call runs in its own session; returned objects are expunged so
    they stay readable (and mutable) after the session closes.
    """

    def find_user(self, user_id: int) -> Optional[User]:
        if not in_id_range(user_id):
            return None
        with get_db_session() as session:
            user = session.get(User, user_id)
            if user:
                session.expunge(user)
            return user

    def find_issue(self, issue_id: int) -> Optional[Issue]:
        if not in_id_range(issue_id):
            return None
        with get_db_session() as session:
            issue = session.get(Issue, issue_id)
            if issue:
                session.expunge(issue)
            return issue

    def create_issue(self, draft: Issue) -> Issue:
        with get_db_session() as session:
            session.add(draft)
            session.flush()  # Get the issue ID
            
            session.commit()
            session.refresh(draft)
            # Make issue accessible outside session
            session.expunge(draft)
            return draft

    def list_issues(self, status: Optional[Status] = None) -> List[Issue]:
        with get_db_session() as session:
            query = session.query(Issue)
            if status is not None:
                query = query.filter(Issue.status == status)
            
            issues = query.order_by(Issue.id).all()
            
            # Expunge issues to make them accessible outside session
            for issue in issues:
                session.expunge(issue)
            
            return issues

    def save_issue(self, issue: Issue) -> Issue:
        with get_db_session() as session:
            merged = session.merge(issue)
            session.commit()
            session.refresh(merged)
            session.expunge(merged)
            return merged
