# /eduguru/services/recap_service.py

"""
Recap ("leger") reports: per-student attendance tallies and pivoted score
matrices for one class over a period.

The builder functions are pure. They take already-fetched, serialized
records (camelCase dicts as returned by the API) and never touch the
database, which keeps the arithmetic easy to test. The thin wrappers at the
bottom fetch the data for an owner and call them.

Months are 1-based (1 = January). A period is a calendar year plus either
an explicit set of months or a semester band:

- ODD  (ganjil): July to December
- EVEN (genap):  January to June
- ALL:           the whole year

An explicit month selection always wins over the semester.
"""

import datetime as dt
from typing import Dict, Iterable, List, Optional

import pandas as pd

from .database_service import DatabaseService
from . import class_service, record_service

SEMESTER_MONTHS = {
    "ODD": list(range(7, 13)),
    "EVEN": list(range(1, 7)),
    "ALL": list(range(1, 13)),
}
ATTENDANCE_CODES = ("H", "S", "I", "A")
DEFAULT_TITLES = {"FORMATIVE": "PH 1", "PORTFOLIO": "Tugas 1", "SUMMATIVE": "SLM 1"}


def resolve_months(semester: Optional[str] = "ALL", months: Optional[Iterable[int]] = None) -> List[int]:
    selected = sorted({int(m) for m in months or []})
    if selected:
        invalid = [m for m in selected if m < 1 or m > 12]
        if invalid:
            raise ValueError(f"Invalid month value(s): {invalid}")
        return selected
    key = (semester or "ALL").upper()
    if key not in SEMESTER_MONTHS:
        raise ValueError(f"Unknown semester '{semester}'. Use ODD, EVEN or ALL.")
    return SEMESTER_MONTHS[key]


def _as_date(value) -> Optional[dt.date]:
    if not value:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value)[:10])


def filter_by_period(records: Iterable[Dict], year: int, months: Iterable[int]) -> List[Dict]:
    allowed = set(months)
    kept = []
    for record in records:
        date = _as_date(record.get("date"))
        if date and date.year == year and date.month in allowed:
            kept.append(record)
    return kept


# --- Attendance recap ---

def build_attendance_recap(students: List[Dict], records: List[Dict], subject: Optional[str] = None) -> Dict:
    """
    Tallies H/S/I/A per student. `percentage` is the share of H records,
    rounded to a whole number, and 0 for a student with no records.
    """
    if subject and subject.upper() != "ALL":
        records = [r for r in records if r.get("subject") == subject]

    rows = []
    summary = {code: 0 for code in ATTENDANCE_CODES}
    for student in students:
        counts = {code: 0 for code in ATTENDANCE_CODES}
        for record in records:
            if record.get("studentId") == student["id"] and record.get("status") in counts:
                counts[record["status"]] += 1
        total = sum(counts.values())
        percentage = round(counts["H"] / total * 100) if total else 0
        for code in ATTENDANCE_CODES:
            summary[code] += counts[code]
        rows.append({
            "studentId": student["id"],
            "studentName": student["name"],
            "nis": student.get("nis"),
            **counts,
            "total": total,
            "percentage": percentage,
        })

    summary["total"] = sum(summary[code] for code in ATTENDANCE_CODES)
    return {"rows": rows, "summary": summary}


# --- Score recap ---

def _effective_title(score: Dict) -> str:
    return score.get("assessmentTitle") or DEFAULT_TITLES.get(score.get("type"), "Penilaian")


def _titles(scores: List[Dict], assessment_type: str) -> List[str]:
    return sorted({_effective_title(s) for s in scores if s.get("type") == assessment_type})


def build_score_recap(students: List[Dict], scores: List[Dict]) -> Dict:
    """
    Pivots scores into one row per student. FORMATIVE, PORTFOLIO and
    SUMMATIVE get one column per distinct title (sorted); STS and SAS are
    single values. The average covers every non-null value shown; NOTE
    entries only contribute to the notes list.
    """
    columns = {t: _titles(scores, t) for t in ("FORMATIVE", "PORTFOLIO", "SUMMATIVE")}
    ordered = sorted(scores, key=lambda s: (str(s.get("date") or ""), s.get("id") or ""))

    rows = []
    for student in students:
        own = [s for s in ordered if s.get("studentId") == student["id"]]

        def find(assessment_type: str, title: Optional[str] = None):
            for s in own:
                if s.get("type") == assessment_type and (title is None or _effective_title(s) == title):
                    return s.get("score")
            return None

        pivot = {t: {title: find(t, title) for title in titles} for t, titles in columns.items()}
        sts, sas = find("STS"), find("SAS")

        values = [v for group in pivot.values() for v in group.values()] + [sts, sas]
        values = [v for v in values if v is not None]
        average = round(sum(values) / len(values), 1) if values else 0

        notes = [s.get("notes") or s.get("assessmentTitle") for s in own if s.get("type") == "NOTE"]
        rows.append({
            "studentId": student["id"],
            "studentName": student["name"],
            "nis": student.get("nis"),
            "formative": pivot["FORMATIVE"],
            "portfolio": pivot["PORTFOLIO"],
            "summative": pivot["SUMMATIVE"],
            "sts": sts,
            "sas": sas,
            "average": average,
            "notes": [n for n in notes if n],
        })

    return {
        "formativeTitles": columns["FORMATIVE"],
        "portfolioTitles": columns["PORTFOLIO"],
        "summativeTitles": columns["SUMMATIVE"],
        "rows": rows,
    }


# --- CSV export ---

def attendance_recap_to_csv(recap: Dict) -> str:
    df = pd.DataFrame(recap["rows"], columns=["studentName", "nis", "H", "S", "I", "A", "total", "percentage"])
    df = df.rename(columns={"studentName": "Nama", "nis": "NIS", "total": "Total", "percentage": "Kehadiran (%)"})
    df.insert(0, "No", range(1, len(df) + 1))
    return df.to_csv(index=False)


def score_recap_to_csv(recap: Dict) -> str:
    records = []
    for number, row in enumerate(recap["rows"], start=1):
        record = {"No": number, "Nama": row["studentName"], "NIS": row["nis"]}
        for title in recap["formativeTitles"]:
            record[f"Formatif: {title}"] = row["formative"].get(title)
        for title in recap["portfolioTitles"]:
            record[f"Portofolio: {title}"] = row["portfolio"].get(title)
        for title in recap["summativeTitles"]:
            record[f"Sumatif: {title}"] = row["summative"].get(title)
        record["STS"] = row["sts"]
        record["SAS"] = row["sas"]
        record["Rata-Rata"] = row["average"]
        records.append(record)
    return pd.DataFrame(records).to_csv(index=False)


# --- Data-fetching wrappers ---

def get_attendance_recap(
    db: DatabaseService,
    user_id: str,
    class_id: str,
    year: int,
    semester: Optional[str] = "ALL",
    months: Optional[List[int]] = None,
    subject: Optional[str] = None,
) -> Dict:
    period = resolve_months(semester, months)
    students = class_service.get_students(db=db, user_id=user_id, class_id=class_id)
    records = [record_service.serialize_attendance(r) for r in db.get_attendance_for_year(user_id, class_id, year)]
    recap = build_attendance_recap(students, filter_by_period(records, year, period), subject=subject)
    return {"classId": class_id, "subject": subject, "months": period, **recap}


def get_score_recap(
    db: DatabaseService,
    user_id: str,
    class_id: str,
    subject: str,
    year: int,
    semester: Optional[str] = "ALL",
    months: Optional[List[int]] = None,
) -> Dict:
    period = resolve_months(semester, months)
    students = class_service.get_students(db=db, user_id=user_id, class_id=class_id)
    scores = record_service.get_scores(db=db, user_id=user_id, class_id=class_id, subject=subject)
    recap = build_score_recap(students, filter_by_period(scores, year, period))
    return {"classId": class_id, "subject": subject, "months": period, **recap}
