"""Issue model"""

from sqlalchemy import Column, Integer, String, Text, Enum, ForeignKey

from .base import Base, Status, UTCDateTime

class Issue(Base):
    """Issue model.

    Also the record type of the in-memory store. Column defaults only
    apply on flush, so the lifecycle engine assigns every column.
    """
    
    __tablename__ = "issues"
    # AUTOINCREMENT keeps SQLite from reusing the id of a removed row
    __table_args__ = {"sqlite_autoincrement": True}
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    
    status = Column(Enum(Status), nullable=False, default=Status.PENDING)
    
    # Weak reference to the assignee; issues never own users
    assignee_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    
    # Timestamps
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
    
    def __repr__(self):
        return f"<Issue(id={self.id}, title='{self.title[:50]}', status='{self.status.value}')>"
    
    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "assignee_id": self.assignee_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
