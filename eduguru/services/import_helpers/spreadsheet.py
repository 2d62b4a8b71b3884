# /eduguru/services/import_helpers/spreadsheet.py

"""
Turns uploaded master-data sheets (CSV or XLSX) into row dictionaries in
the same shape the JSON bulk endpoints accept.

Column names follow the downloadable templates (Indonesian headers), with
English fallbacks:

- classes:  ID | Kode, NamaKelas | Name, Tingkat | Grade
- students: ID, Nama | Name, NIS, KodeKelas | ClassID
- subjects: Mapel | Subject
"""

import io
from typing import Dict, List, Optional

import pandas as pd

EXCEL_CONTENT_TYPES = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
}
DEFAULT_GRADE = 10


def read_table(file_bytes: bytes, filename: str = "", content_type: str = "") -> pd.DataFrame:
    """
    Reads the first sheet into a DataFrame of strings. Every cell is kept as
    text so NIS values keep their leading zeros; empty cells become None.
    """
    name = (filename or "").lower()
    if content_type in EXCEL_CONTENT_TYPES or name.endswith((".xlsx", ".xls")):
        df = pd.read_excel(io.BytesIO(file_bytes), dtype=str)
    elif content_type in ("text/csv", "application/csv") or name.endswith(".csv"):
        df = pd.read_csv(io.BytesIO(file_bytes), dtype=str)
    else:
        raise ValueError(f"Unsupported file type: {content_type or filename}")

    df.columns = [str(column).strip() for column in df.columns]
    df = df.dropna(how="all")
    return df.astype(object).where(pd.notna(df), None)


def _first(row: Dict, *columns: str) -> Optional[str]:
    for column in columns:
        value = row.get(column)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def _grade(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_GRADE
    try:
        return int(float(value))
    except ValueError as exc:
        raise ValueError(f"Invalid grade value: '{value}'") from exc


def class_rows(df: pd.DataFrame) -> List[Dict]:
    rows = []
    for row in df.to_dict(orient="records"):
        rows.append({
            "id": _first(row, "ID", "Kode"),
            "name": _first(row, "NamaKelas", "Name"),
            "grade": _grade(_first(row, "Tingkat", "Grade")),
        })
    return rows


def student_rows(df: pd.DataFrame) -> List[Dict]:
    rows = []
    for row in df.to_dict(orient="records"):
        rows.append({
            "id": _first(row, "ID"),
            "name": _first(row, "Nama", "Name") or "No Name",
            "nis": _first(row, "NIS") or "-",
            "classId": _first(row, "KodeKelas", "ClassID"),
        })
    return rows


def subject_rows(df: pd.DataFrame) -> List[str]:
    return [name for name in (_first(row, "Mapel", "Subject") for row in df.to_dict(orient="records")) if name]
