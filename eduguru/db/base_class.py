# /eduguru/db/base_class.py

from sqlalchemy.orm import declarative_base

# Every ORM model inherits from this Base so that a single metadata object
# knows about all tables (used by create_all at startup and by Alembic).
Base = declarative_base()
