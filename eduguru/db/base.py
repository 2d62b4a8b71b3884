# /eduguru/db/base.py

# Central registry for all SQLAlchemy models. Importing them here makes sure
# Base.metadata is complete before create_all or Alembic's autogenerate runs.

from .base_class import Base

from .models.user_model import User
from .models.class_student_models import ClassGroup, Student, Subject
from .models.record_models import JournalEntry, AttendanceRecord, StudentScore, CounselingSession
