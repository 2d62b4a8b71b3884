# /eduguru/db/models/class_student_models.py

"""
SQLAlchemy models for the master data a teacher maintains: classes
(`ClassGroup`), the students enrolled in them, and the subjects taught.

Ownership lives on every row as `user_id`. A student's class reference is
nullable: deleting a class detaches its students instead of deleting them.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from ..base_class import Base


class ClassGroup(Base):
    __tablename__ = "classes"

    # Short code such as "C7K2QX" when generated by the server.
    id = Column(String(255), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    grade = Column(Integer, nullable=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("User", back_populates="classes")
    # No delete cascade here: the database sets students.class_id to NULL.
    students = relationship("Student", back_populates="class_", passive_deletes=True)


class Student(Base):
    __tablename__ = "students"

    id = Column(String(255), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    # National student number ("Nomor Induk Siswa").
    nis = Column(String(50), nullable=True)
    class_id = Column(String(255), ForeignKey("classes.id", ondelete="SET NULL"), nullable=True, index=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    class_ = relationship("ClassGroup", back_populates="students")


class Subject(Base):
    __tablename__ = "subjects"
    __table_args__ = (UniqueConstraint("name", "user_id", name="uq_subjects_name_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
