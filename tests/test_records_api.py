# /tests/test_records_api.py

import datetime as dt

import pytest


@pytest.fixture
def roster(client, auth_headers):
    client.post("/api/sync/master", headers=auth_headers, json={
        "classes": [{"id": "C10A", "name": "X IPA 1", "grade": 10}],
        "students": [
            {"id": "S1", "name": "Ani", "nis": "001", "classId": "C10A"},
            {"id": "S2", "name": "Budi", "nis": "002", "classId": "C10A"},
        ],
    })
    return auth_headers


# --- Journals ---

def test_journal_overwrite_keeps_created_at(client, auth_headers):
    """
    GIVEN a saved journal entry
    WHEN it is saved again under the same id with different content
    THEN the content changes and the original creation timestamp is kept
    """
    first = client.post("/api/journals", headers=auth_headers, json={
        "id": "J1", "date": "2025-08-04", "classId": "C10A", "subject": "Fisika",
        "learningObjective": "Hukum Newton", "createdAt": 1722740000000,
    })
    assert first.status_code == 200

    second = client.post("/api/journals", headers=auth_headers, json={
        "id": "J1", "date": "2025-08-04", "classId": "C10A", "subject": "Fisika",
        "learningObjective": "Hukum Newton II", "reflection": "Siswa aktif",
    })

    body = second.json()
    assert body["createdAt"] == 1722740000000
    assert body["learningObjective"] == "Hukum Newton II"
    assert len(client.get("/api/journals", headers=auth_headers).json()) == 1


def test_journals_are_listed_newest_first(client, auth_headers):
    for journal_id, date in (("J1", "2025-08-01"), ("J2", "2025-08-10"), ("J3", "2025-08-05")):
        client.post("/api/journals", headers=auth_headers, json={"id": journal_id, "date": date})

    listed = client.get("/api/journals", headers=auth_headers).json()

    assert [j["id"] for j in listed] == ["J2", "J3", "J1"]


def test_journal_new_entry_gets_generated_id(client, auth_headers):
    body = client.post("/api/journals", headers=auth_headers, json={"date": "2025-08-04"}).json()

    assert body["id"].startswith("jrn_")
    assert isinstance(body["createdAt"], int)


def test_delete_journal(client, auth_headers, other_auth_headers):
    client.post("/api/journals", headers=auth_headers, json={"id": "J1", "date": "2025-08-04"})

    assert client.delete("/api/journals/J1", headers=other_auth_headers).status_code == 404
    assert client.delete("/api/journals/J1", headers=auth_headers).json() == {"success": True}
    assert client.delete("/api/journals/J1", headers=auth_headers).status_code == 404


def test_journal_id_of_another_teacher_is_conflict(client, auth_headers, other_auth_headers):
    client.post("/api/journals", headers=auth_headers, json={"id": "J1", "date": "2025-08-04"})

    response = client.post("/api/journals", headers=other_auth_headers, json={"id": "J1", "date": "2025-08-05"})

    assert response.status_code == 409


# --- Attendance & Scores ---

def test_attendance_bulk_and_filters(client, roster):
    records = [
        {"date": "2025-08-04", "studentId": "S1", "classId": "C10A", "subject": "Fisika", "status": "H"},
        {"date": "2025-08-04", "studentId": "S2", "classId": "C10A", "subject": "Fisika", "status": "S"},
        {"date": "2025-08-05", "studentId": "S1", "classId": "C10A", "subject": "Fisika", "status": "A"},
    ]

    response = client.post("/api/attendance/bulk", headers=roster, json={"records": records})

    assert response.json() == {"success": True, "imported": 3, "invalidClassRefs": 0}
    on_day = client.get("/api/attendance", headers=roster, params={"date": "2025-08-04"}).json()
    assert [(r["studentId"], r["status"]) for r in on_day] == [("S1", "H"), ("S2", "S")]


def test_attendance_for_another_teachers_student_is_400(client, roster, other_auth_headers):
    client.post("/api/sync/master", headers=other_auth_headers, json={"students": [{"id": "SB", "name": "Citra"}]})

    response = client.post("/api/attendance/bulk", headers=roster, json={"records": [
        {"date": "2025-08-04", "studentId": "SB", "classId": "C10A", "subject": "Fisika", "status": "H"},
    ]})

    assert response.status_code == 400
    assert response.json()["invalidCount"] == 1
    assert client.get("/api/attendance", headers=roster).json() == []


def test_attendance_rejects_unknown_status(client, roster):
    response = client.post("/api/attendance/bulk", headers=roster, json={"records": [
        {"date": "2025-08-04", "studentId": "S1", "classId": "C10A", "subject": "Fisika", "status": "X"},
    ]})

    assert response.status_code == 400


@pytest.mark.parametrize("score", [-1, 100.5])
def test_score_out_of_range_is_rejected(client, roster, score):
    response = client.post("/api/scores/bulk", headers=roster, json={"scores": [
        {"studentId": "S1", "classId": "C10A", "subject": "Fisika", "type": "STS", "score": score},
    ]})

    assert response.status_code == 400
    assert client.get("/api/scores", headers=roster).json() == []


def test_note_entries_may_omit_the_score(client, roster):
    response = client.post("/api/scores/bulk", headers=roster, json={"scores": [
        {"studentId": "S1", "classId": "C10A", "subject": "Fisika", "type": "NOTE", "notes": "Perlu bimbingan"},
    ]})

    assert response.status_code == 200
    (stored,) = client.get("/api/scores", headers=roster, params={"type": "NOTE"}).json()
    assert stored["score"] is None


# --- Counseling ---

def test_counseling_save_update_and_privacy_flag(client, roster):
    saved = client.post("/api/counseling", headers=roster, json={
        "id": "K1", "studentId": "S1", "date": "2025-08-06", "type": "PERILAKU",
        "notes": "Sering terlambat", "isPrivate": True,
    }).json()
    assert saved["studentName"] == "Ani"
    assert saved["isPrivate"] is True

    updated = client.post("/api/counseling", headers=roster, json={
        "id": "K1", "studentId": "S1", "date": "2025-08-06", "type": "PERILAKU",
        "notes": "Sering terlambat", "followUp": "Panggil orang tua",
    }).json()

    assert updated["followUp"] == "Panggil orang tua"
    assert len(client.get("/api/counseling", headers=roster, params={"studentId": "S1"}).json()) == 1


def test_counseling_for_unknown_student_is_404(client, roster):
    response = client.post("/api/counseling", headers=roster, json={"studentId": "GHOST", "date": "2025-08-06", "type": "SOSIAL"})

    assert response.status_code == 404


# --- Dashboard ---

def test_dashboard_stats(client, roster):
    today = dt.date.today()
    client.post("/api/journals", headers=roster, json={"id": "J1", "date": today.isoformat()})
    client.post("/api/journals", headers=roster, json={"id": "J2", "date": today.replace(day=1).isoformat()})
    client.post("/api/journals", headers=roster, json={"id": "J0", "date": (today.replace(day=1) - dt.timedelta(days=1)).isoformat()})

    stats = client.get("/api/dashboard/stats", headers=roster).json()

    assert stats["studentCount"] == 2
    assert stats["classCount"] == 1
    assert stats["journalCount"] == 2
    assert stats["teachingHours"] == 4
    assert len(stats["recentActivity"]) == 3


# --- Reports ---

def test_attendance_recap_for_semester(client, roster):
    client.post("/api/attendance/bulk", headers=roster, json={"records": [
        {"date": "2025-08-04", "studentId": "S1", "classId": "C10A", "subject": "Fisika", "status": "H"},
        {"date": "2025-08-05", "studentId": "S1", "classId": "C10A", "subject": "Fisika", "status": "A"},
        {"date": "2025-03-03", "studentId": "S1", "classId": "C10A", "subject": "Fisika", "status": "S"},
    ]})

    response = client.get("/api/reports/attendance", headers=roster, params={"classId": "C10A", "year": 2025, "semester": "ODD"})

    assert response.status_code == 200
    recap = response.json()
    assert recap["months"] == [7, 8, 9, 10, 11, 12]
    rows = {r["studentId"]: r for r in recap["rows"]}
    assert (rows["S1"]["H"], rows["S1"]["A"], rows["S1"]["S"], rows["S1"]["percentage"]) == (1, 1, 0, 50)
    assert rows["S2"]["total"] == 0 and rows["S2"]["percentage"] == 0


def test_attendance_recap_rejects_bad_month(client, roster):
    response = client.get("/api/reports/attendance", headers=roster, params={"classId": "C10A", "year": 2025, "months": [13]})

    assert response.status_code == 400


def test_score_recap_and_csv_export(client, roster):
    client.post("/api/scores/bulk", headers=roster, json={"scores": [
        {"studentId": "S1", "classId": "C10A", "subject": "Fisika", "type": "FORMATIVE", "assessmentTitle": "PH 1", "score": 80, "date": "2025-08-10"},
        {"studentId": "S1", "classId": "C10A", "subject": "Fisika", "type": "SAS", "score": 91, "date": "2025-12-01"},
    ]})
    params = {"classId": "C10A", "subject": "Fisika", "year": 2025, "semester": "ODD"}

    recap = client.get("/api/reports/scores", headers=roster, params=params).json()
    export = client.get("/api/reports/scores/export", headers=roster, params=params)

    rows = {r["studentId"]: r for r in recap["rows"]}
    assert recap["formativeTitles"] == ["PH 1"]
    assert rows["S1"]["average"] == 85.5
    assert rows["S2"]["average"] == 0
    assert export.headers["content-type"].startswith("text/csv")
    assert export.text.splitlines()[0] == "No,Nama,NIS,Formatif: PH 1,STS,SAS,Rata-Rata"
