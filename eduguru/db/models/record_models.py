# /eduguru/db/models/record_models.py

"""
SQLAlchemy models for the day-to-day records a teacher produces: teaching
journals, attendance, scores and counseling notes.

Attendance, scores and counseling reference a student with ON DELETE
CASCADE, so removing a student removes their history with them.
"""

from sqlalchemy import BigInteger, Boolean, Column, Date, DateTime, Float, ForeignKey, String, Text, func

from ..base_class import Base

ATTENDANCE_STATUSES = ("H", "S", "I", "A")  # hadir, sakit, izin, alpa
ASSESSMENT_TYPES = ("FORMATIVE", "SUMMATIVE", "STS", "SAS", "PORTFOLIO", "NOTE")
COUNSELING_TYPES = ("AKADEMIK", "PERILAKU", "PRIBADI", "SOSIAL")


class JournalEntry(Base):
    __tablename__ = "journals"

    id = Column(String(255), primary_key=True, index=True)
    date = Column(Date, nullable=False)
    class_id = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=True)
    start_time = Column(String(50), nullable=True)
    learning_objective = Column(Text, nullable=True)
    materials = Column(Text, nullable=True)
    method = Column(String(100), nullable=True)
    activities = Column(Text, nullable=True)
    reflection = Column(Text, nullable=True)
    engagement_level = Column(String(100), nullable=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Epoch milliseconds, as sent by the client.
    created_at = Column(BigInteger, nullable=True)


class AttendanceRecord(Base):
    __tablename__ = "attendance"

    # "{date}_{class_id}_{subject}_{student_id}" unless supplied by the client.
    id = Column(String(255), primary_key=True, index=True)
    date = Column(Date, nullable=False)
    student_id = Column(String(255), ForeignKey("students.id", ondelete="CASCADE"), nullable=True)
    class_id = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=True)
    status = Column(String(10), nullable=False)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


class StudentScore(Base):
    __tablename__ = "scores"

    id = Column(String(255), primary_key=True, index=True)
    student_id = Column(String(255), ForeignKey("students.id", ondelete="CASCADE"), nullable=True)
    class_id = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=True)
    type = Column(String(50), nullable=False)
    score = Column(Float, nullable=True)
    assessment_title = Column(String(255), nullable=True)
    date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)


class CounselingSession(Base):
    __tablename__ = "counseling"

    id = Column(String(255), primary_key=True, index=True)
    student_id = Column(String(255), ForeignKey("students.id", ondelete="CASCADE"), nullable=True)
    date = Column(Date, nullable=True)
    type = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    follow_up = Column(Text, nullable=True)
    ai_suggestion = Column(Text, nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
