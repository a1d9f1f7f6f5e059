"""User model"""

from sqlalchemy import Column, Integer, String

from .base import Base

# Users are seeded once and never change; id 0 is never allocated
SEED_USERS = [
    {"id": 1, "name": "김개발"},
    {"id": 2, "name": "이디자인"},
    {"id": 3, "name": "박기획"},
]

class User(Base):
    """User that issues may be assigned to"""
    
    __tablename__ = "users"
    
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    
    def __repr__(self):
        return f"<User(id={self.id}, name='{self.name}')>"
