# /tests/test_record_ids.py

import datetime as dt
import re

import pytest

from eduguru.services.import_helpers import record_ids


@pytest.mark.parametrize("title, expected", [
    ("Ulangan Harian 1", "ulanganharian1"),
    ("  PH-2 (Bab 3)  ", "ph2bab3"),
    ("", ""),
    ("Évaluation", "valuation"),
])
def test_slugify_title(title, expected):
    assert record_ids.slugify_title(title) == expected


def test_attendance_record_id_uses_natural_key():
    """
    GIVEN a date, class, subject and student
    WHEN the attendance id is derived
    THEN it is the four parts joined by underscores, with an ISO date
    """
    record_id = record_ids.attendance_record_id(dt.date(2025, 3, 7), "C10A1", "Matematika", "S0001")
    assert record_id == "2025-03-07_C10A1_Matematika_S0001"


def test_attendance_record_id_accepts_iso_strings():
    assert record_ids.attendance_record_id("2025-03-07", "C1", "IPA", "S1") == \
        record_ids.attendance_record_id(dt.date(2025, 3, 7), "C1", "IPA", "S1")


def test_score_record_id_slugifies_the_title():
    record_id = record_ids.score_record_id("C1", "IPA", "FORMATIVE", "Ulangan Harian 1", "S1")
    assert record_id == "C1_IPA_FORMATIVE_ulanganharian1_S1"


def test_score_record_id_without_title_falls_back_to_standard():
    """
    GIVEN an assessment without a title (e.g. a mid-term STS)
    WHEN the score id is derived
    THEN the title slot reads 'standard', so re-imports hit the same row
    """
    assert record_ids.score_record_id("C1", "IPA", "STS", "", "S1") == "C1_IPA_STS_standard_S1"
    assert record_ids.score_record_id("C1", "IPA", "STS", "!!!", "S1") == "C1_IPA_STS_standard_S1"


def test_generated_codes_have_the_expected_shape():
    assert re.fullmatch(r"C[A-Z0-9]{5}", record_ids.generate_class_id())
    assert re.fullmatch(r"S[A-Z0-9]{5}", record_ids.generate_student_import_id())
    assert re.fullmatch(r"jrn_[0-9a-f]{12}", record_ids.generate_id("jrn"))
