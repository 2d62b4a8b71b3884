# /eduguru/db/models/user_model.py

"""
SQLAlchemy model for `User`, the owner of every other record in the system.
"""

from sqlalchemy import Column, DateTime, String, Text, func
from sqlalchemy.orm import relationship

from ..base_class import Base

USER_ROLES = ("GURU", "WALI_KELAS", "BK", "ADMIN")


class User(Base):
    __tablename__ = "users"

    id = Column(String(255), primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    # bcrypt hash, or the literal marker "oauth_protected" for OAuth accounts.
    password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    role = Column(String(50), nullable=False, default="GURU")
    avatar = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    classes = relationship("ClassGroup", back_populates="owner", passive_deletes=True)
