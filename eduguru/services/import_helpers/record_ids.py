# /eduguru/services/import_helpers/record_ids.py

"""
Identifier construction for imported records.

Attendance and score ids are derived from the record's natural key, so
importing the same sheet twice lands on the same rows instead of adding
duplicates. The derivation is plain string concatenation with a small
normalisation step; it must never change, or previously stored rows would
stop matching.
"""

import datetime as dt
import re
import secrets
import string
import uuid
from typing import Union

_SLUG_DROP = re.compile(r"[^a-z0-9]")
_CODE_ALPHABET = string.ascii_uppercase + string.digits


def slugify_title(text: str) -> str:
    """'Ulangan Harian 1' -> 'ulanganharian1'. Non-ASCII letters are dropped."""
    if not text:
        return ""
    return _SLUG_DROP.sub("", "".join(str(text).lower().split()))


def _date_key(value: Union[dt.date, str]) -> str:
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value)


def attendance_record_id(date: Union[dt.date, str], class_id: str, subject: str, student_id: str) -> str:
    return f"{_date_key(date)}_{class_id}_{subject}_{student_id}"


def score_record_id(class_id: str, subject: str, assessment_type: str, title: str, student_id: str) -> str:
    slug = slugify_title(title) or "standard"
    return f"{class_id}_{subject}_{assessment_type}_{slug}_{student_id}"


def _short_code(prefix: str, length: int = 5) -> str:
    return prefix + "".join(secrets.choice(_CODE_ALPHABET) for _ in range(length))


def generate_class_id() -> str:
    return _short_code("C")


def generate_student_import_id() -> str:
    return _short_code("S")


def generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"
