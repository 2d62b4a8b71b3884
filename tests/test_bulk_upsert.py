# /tests/test_bulk_upsert.py

import datetime as dt

import pytest

from eduguru.core.errors import (
    ConfirmationRequiredError,
    InvalidClassReferenceError,
    OwnershipConflictError,
    ReconciliationError,
    UnknownStudentReferenceError,
)
from eduguru.services.import_helpers import upsert


# --- Fixtures ---

@pytest.fixture
def roster(db, owner):
    """One class with two students, owned by `owner`."""
    upsert.import_classes(db, [{"id": "C10A", "name": "X IPA 1", "grade": 10}], owner)
    upsert.import_students(db, [
        {"id": "S1", "name": "Ani", "nis": "001", "classId": "C10A"},
        {"id": "S2", "name": "Budi", "nis": "002", "classId": "C10A"},
    ], owner)
    return {"class_id": "C10A", "student_ids": ["S1", "S2"]}


def _student_map(db, user_id):
    return {s.id: s for s, _ in db.get_students(user_id=user_id)}


# --- Classes ---

def test_import_classes_is_idempotent(db, owner):
    """
    GIVEN a batch of classes
    WHEN the same batch is imported twice
    THEN the stored rows are the same as after the first import
    """
    rows = [{"id": "C1", "name": "X IPA 1", "grade": 10}, {"id": "C2", "name": "XI IPS 2", "grade": 11}]

    first = upsert.import_classes(db, rows, owner)
    second = upsert.import_classes(db, rows, owner)

    assert first.imported == second.imported == 2
    stored = [(c.id, c.name, c.grade) for c in db.get_all_classes(user_id=owner)]
    assert stored == [("C1", "X IPA 1", 10), ("C2", "XI IPS 2", 11)]


def test_import_classes_overwrites_name_and_grade(db, owner):
    upsert.import_classes(db, [{"id": "C1", "name": "X IPA 1", "grade": 10}], owner)
    upsert.import_classes(db, [{"id": "C1", "name": "X IPA Unggulan", "grade": 11}], owner)

    stored = db.get_class_by_id(class_id="C1", user_id=owner)
    assert (stored.name, stored.grade) == ("X IPA Unggulan", 11)


def test_import_classes_generates_missing_ids(db, owner):
    upsert.import_classes(db, [{"name": "X IPA 1", "grade": 10}], owner)

    (stored,) = db.get_all_classes(user_id=owner)
    assert stored.id.startswith("C") and len(stored.id) == 6


def test_empty_batch_is_a_successful_no_op(db, owner):
    for result in (
        upsert.import_classes(db, [], owner),
        upsert.import_students(db, [], owner),
        upsert.import_subjects(db, [], owner),
        upsert.import_attendance(db, [], owner),
        upsert.import_scores(db, [], owner),
    ):
        assert result.imported == 0
        assert result.invalid_class_refs == 0


def test_failed_row_rolls_back_the_whole_batch(db, owner):
    """
    GIVEN a batch of three classes where the second has no name
    WHEN it is imported
    THEN a ReconciliationError is raised and none of the three is stored
    """
    rows = [
        {"id": "C1", "name": "X IPA 1", "grade": 10},
        {"id": "C2", "name": None, "grade": 10},
        {"id": "C3", "name": "X IPA 3", "grade": 10},
    ]

    with pytest.raises(ReconciliationError) as exc_info:
        upsert.import_classes(db, rows, owner)

    assert exc_info.value.status_code == 500
    assert "No changes were saved" in exc_info.value.to_body()["error"]
    assert db.get_all_classes(user_id=owner) == []


def test_id_owned_by_another_user_is_rejected(db, owner, other_owner):
    """
    GIVEN a class id already owned by one teacher
    WHEN another teacher imports a class with that id
    THEN the batch fails with an ownership conflict and the original is untouched
    """
    upsert.import_classes(db, [{"id": "C1", "name": "X IPA 1", "grade": 10}], owner)

    with pytest.raises(OwnershipConflictError) as exc_info:
        upsert.import_classes(db, [
            {"id": "C9", "name": "Kelas Baru", "grade": 12},
            {"id": "C1", "name": "Hijacked", "grade": 12},
        ], other_owner)

    assert exc_info.value.status_code == 409
    assert db.get_class_by_id(class_id="C1", user_id=owner).name == "X IPA 1"
    assert db.get_all_classes(user_id=other_owner) == []


# --- Students ---

def test_students_with_unknown_class_need_confirmation(db, owner, roster):
    """
    GIVEN the 'confirm' policy and a batch where one student names an unknown class
    WHEN the batch is sent without confirmation
    THEN nothing is stored and the error carries the invalid count
    """
    rows = [
        {"id": "S3", "name": "Citra", "nis": "003", "classId": "C10A"},
        {"id": "S4", "name": "Dedi", "nis": "004", "classId": "NOPE"},
    ]

    with pytest.raises(ConfirmationRequiredError) as exc_info:
        upsert.import_students(db, rows, owner, policy="confirm")

    assert exc_info.value.to_body() == {
        "error": exc_info.value.args[0],
        "invalidCount": 1,
        "requiresConfirmation": True,
    }
    assert set(_student_map(db, owner)) == {"S1", "S2"}


def test_confirmed_students_are_stored_without_class(db, owner, roster):
    rows = [
        {"id": "S3", "name": "Citra", "nis": "003", "classId": "C10A"},
        {"id": "S4", "name": "Dedi", "nis": "004", "classId": "NOPE"},
    ]

    result = upsert.import_students(db, rows, owner, confirm=True, policy="confirm")

    assert (result.imported, result.invalid_class_refs) == (2, 1)
    students = _student_map(db, owner)
    assert students["S3"].class_id == "C10A"
    assert students["S4"].class_id is None


def test_clear_policy_stores_immediately_and_counts(db, owner, roster):
    result = upsert.import_students(db, [{"id": "S5", "name": "Eka", "classId": "GHOST"}], owner, policy="clear")

    assert result.invalid_class_refs == 1
    assert _student_map(db, owner)["S5"].class_id is None


def test_reject_policy_refuses_the_batch(db, owner, roster):
    with pytest.raises(InvalidClassReferenceError) as exc_info:
        upsert.import_students(db, [
            {"id": "S6", "name": "Fajar", "classId": "GHOST"},
            {"id": "S7", "name": "Gita", "classId": "GHOST2"},
        ], owner, policy="reject")

    assert exc_info.value.status_code == 400
    assert exc_info.value.to_body()["invalidCount"] == 2
    assert "S6" not in _student_map(db, owner)


def test_blank_class_code_is_not_an_invalid_reference(db, owner, roster):
    result = upsert.import_students(db, [{"id": "S8", "name": "Hana", "classId": "  "}], owner, policy="reject")

    assert result.invalid_class_refs == 0
    assert _student_map(db, owner)["S8"].class_id is None


def test_class_of_another_teacher_counts_as_unknown(db, owner, other_owner, roster):
    result = upsert.import_students(db, [{"id": "X1", "name": "Intan", "classId": "C10A"}], other_owner, policy="clear")

    assert result.invalid_class_refs == 1
    assert _student_map(db, other_owner)["X1"].class_id is None


def test_student_upsert_moves_student_between_classes(db, owner, roster):
    upsert.import_classes(db, [{"id": "C10B", "name": "X IPA 2", "grade": 10}], owner)

    upsert.import_students(db, [{"id": "S1", "name": "Ani Lestari", "nis": "001", "classId": "C10B"}], owner)

    student = _student_map(db, owner)["S1"]
    assert (student.name, student.class_id) == ("Ani Lestari", "C10B")


# --- Subjects ---

def test_subject_import_ignores_duplicates_and_blanks(db, owner):
    """
    GIVEN subject names given as strings and as objects, with blanks and repeats
    WHEN they are imported twice
    THEN each distinct trimmed name is stored exactly once
    """
    items = ["Matematika", {"name": " Fisika "}, "", "   ", {"name": None}, "Matematika"]

    upsert.import_subjects(db, items, owner)
    upsert.import_subjects(db, items, owner)

    assert sorted(db.get_subject_names(user_id=owner)) == ["Fisika", "Matematika"]


def test_subject_names_are_per_owner(db, owner, other_owner):
    upsert.import_subjects(db, ["Biologi"], owner)
    upsert.import_subjects(db, ["Biologi"], other_owner)

    assert db.get_subject_names(user_id=owner) == ["Biologi"]
    assert db.get_subject_names(user_id=other_owner) == ["Biologi"]


# --- Attendance ---

def test_attendance_for_same_slot_collapses_to_latest_status(db, owner, roster):
    """
    GIVEN two saves of attendance for the same date, class, subject and student
    WHEN both are imported
    THEN one row remains and it carries the latest status
    """
    row = {"date": "2025-08-04", "studentId": "S1", "classId": "C10A", "subject": "Matematika"}

    upsert.import_attendance(db, [{**row, "status": "A"}], owner)
    upsert.import_attendance(db, [{**row, "status": "S"}], owner)

    (record,) = db.get_attendance(user_id=owner)
    assert record.id == "2025-08-04_C10A_Matematika_S1"
    assert record.status == "S"


def test_attendance_repeated_in_one_batch_keeps_last(db, owner, roster):
    row = {"date": dt.date(2025, 8, 4), "studentId": "S2", "classId": "C10A", "subject": "IPA"}

    result = upsert.import_attendance(db, [{**row, "status": "H"}, {**row, "status": "I"}], owner)

    assert result.imported == 2
    (record,) = db.get_attendance(user_id=owner)
    assert record.status == "I"


def test_attendance_for_unknown_student_fails(db, owner, roster):
    with pytest.raises(UnknownStudentReferenceError) as exc_info:
        upsert.import_attendance(db, [
            {"date": "2025-08-04", "studentId": "S1", "classId": "C10A", "subject": "IPA", "status": "H"},
            {"date": "2025-08-04", "studentId": "GHOST", "classId": "C10A", "subject": "IPA", "status": "H"},
        ], owner)

    assert db.get_attendance(user_id=owner) == []
    assert exc_info.value.status_code == 400
    assert exc_info.value.student_ids == ["GHOST"]


def test_records_for_another_teachers_student_are_refused(db, owner, other_owner, roster):
    """
    GIVEN a student that belongs to another teacher
    WHEN attendance and a score are imported for that student
    THEN both batches are refused, nothing is stored, and the other teacher
         deleting the student leaves the importer's own records alone
    """
    upsert.import_classes(db, [{"id": "CB", "name": "XI IPS 2", "grade": 11}], other_owner)
    upsert.import_students(db, [{"id": "SB", "name": "Citra", "classId": "CB"}], other_owner)
    upsert.import_attendance(db, [
        {"date": "2025-08-04", "studentId": "S1", "classId": "C10A", "subject": "IPA", "status": "H"},
    ], owner)
    upsert.import_scores(db, [
        {"studentId": "S1", "classId": "C10A", "subject": "IPA", "type": "STS", "score": 80},
    ], owner)

    with pytest.raises(UnknownStudentReferenceError):
        upsert.import_attendance(db, [
            {"date": "2025-08-05", "studentId": "S2", "classId": "C10A", "subject": "IPA", "status": "H"},
            {"date": "2025-08-05", "studentId": "SB", "classId": "C10A", "subject": "IPA", "status": "A"},
        ], owner)
    with pytest.raises(UnknownStudentReferenceError):
        upsert.import_scores(db, [
            {"studentId": "SB", "classId": "C10A", "subject": "IPA", "type": "STS", "score": 60},
        ], owner)

    assert [r.student_id for r in db.get_attendance(user_id=owner)] == ["S1"]
    assert [s.student_id for s in db.get_scores(user_id=owner)] == ["S1"]

    assert db.delete_student(student_id="SB", user_id=other_owner) is True

    assert len(db.get_attendance(user_id=owner)) == 1
    assert len(db.get_scores(user_id=owner)) == 1


# --- Scores ---

def test_score_reimport_updates_only_score_and_notes(db, owner, roster):
    """
    GIVEN a stored score
    WHEN the same assessment is imported again with a new date, score and notes
    THEN score and notes change while the original date is kept
    """
    base = {"studentId": "S1", "classId": "C10A", "subject": "IPA", "type": "FORMATIVE", "assessmentTitle": "PH 1"}

    upsert.import_scores(db, [{**base, "score": 70, "date": "2025-08-10", "notes": None}], owner)
    upsert.import_scores(db, [{**base, "score": 88.5, "date": "2025-09-01", "notes": "Remedial"}], owner)

    (score,) = db.get_scores(user_id=owner)
    assert score.id == "C10A_IPA_FORMATIVE_ph1_S1"
    assert score.score == 88.5
    assert score.notes == "Remedial"
    assert score.date == dt.date(2025, 8, 10)


def test_scores_with_different_titles_are_separate_rows(db, owner, roster):
    base = {"studentId": "S1", "classId": "C10A", "subject": "IPA", "type": "FORMATIVE"}

    upsert.import_scores(db, [
        {**base, "assessmentTitle": "PH 1", "score": 80},
        {**base, "assessmentTitle": "PH 2", "score": 90},
        {**base, "type": "STS", "score": 75},
    ], owner)

    assert sorted(s.id for s in db.get_scores(user_id=owner)) == [
        "C10A_IPA_FORMATIVE_ph1_S1",
        "C10A_IPA_FORMATIVE_ph2_S1",
        "C10A_IPA_STS_standard_S1",
    ]


# --- Master sync ---

def test_master_sync_applies_classes_before_students(db, owner):
    """
    GIVEN a payload whose students reference a class created in the same payload
    WHEN it is synced
    THEN the students are linked to that class and every kind is counted
    """
    counts, invalid = upsert.sync_master_data(
        db,
        classes=[{"id": "C7", "name": "VII A", "grade": 7}],
        students=[
            {"id": "S1", "name": "Ani", "nis": "1", "classId": "C7"},
            {"id": "S2", "name": "Budi", "nis": "2", "classId": "C99"},
        ],
        subjects=["Matematika", {"name": "IPS"}],
        user_id=owner,
    )

    assert counts == {"classes": 1, "students": 2, "subjects": 2}
    assert invalid == 1
    students = _student_map(db, owner)
    assert students["S1"].class_id == "C7"
    assert students["S2"].class_id is None


def test_master_sync_with_nothing_to_do(db, owner):
    counts, invalid = upsert.sync_master_data(db, classes=[], students=[], subjects=["  "], user_id=owner)

    assert counts == {"classes": 0, "students": 0, "subjects": 0}
    assert invalid == 0
