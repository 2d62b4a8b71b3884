# /eduguru/client/api_client.py

"""
Python client for the EduGuru REST API.

Master data (classes, students, subjects) is read through a short-lived
cache so that screens which ask for the same lists repeatedly do not hit
the server every time. Any mutation of a kind drops that kind's cache entry.
Deleting classes also drops the students entry, because the server detaches
their students.
"""

import logging
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import quote

import requests

from .cache import DEFAULT_TTL_SECONDS, TTLCache

logger = logging.getLogger(__name__)

CLASSES = "classes"
STUDENTS = "students"
SUBJECTS = "subjects"


class EduGuruAPIError(Exception):
    def __init__(self, status_code: int, message: str, body: Optional[Dict] = None):
        self.status_code = status_code
        self.body = body or {}
        super().__init__(f"{status_code}: {message}")


class ImportAborted(Exception):
    """The confirmation callback declined to store students without a class."""

    def __init__(self, invalid_count: int):
        self.invalid_count = invalid_count
        super().__init__(f"Import aborted: {invalid_count} student(s) reference an unknown class")


class EduGuruClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        cache: Optional[TTLCache] = None,
        timeout: float = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.cache = cache or TTLCache(DEFAULT_TTL_SECONDS)
        self.timeout = timeout

    # --- Transport ---

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = self.session.request(method, f"{self.base_url}{path}", headers=headers, timeout=self.timeout, **kwargs)
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {"error": response.text}
            raise EduGuruAPIError(response.status_code, body.get("error", response.reason), body)
        return response.json() if response.content else None

    def _cached(self, key: str, path: str) -> List:
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        data = self._request("GET", path)
        self.cache.set(key, data)
        return data

    # --- Auth ---

    def login(self, username: str, password: str) -> Dict:
        data = self._request("POST", "/api/auth/login", json={"username": username, "password": password})
        self.token = data["token"]
        self.cache.clear()
        return data["user"]

    def register(self, username: str, password: str, name: Optional[str] = None, role: Optional[str] = None) -> Dict:
        payload = {"username": username, "password": password, "name": name, "role": role}
        data = self._request("POST", "/api/auth/register", json={k: v for k, v in payload.items() if v is not None})
        self.token = data["token"]
        self.cache.clear()
        return data["user"]

    def logout(self) -> None:
        self.token = None
        self.cache.clear()

    # --- Classes ---

    def get_classes(self) -> List[Dict]:
        return self._cached(CLASSES, "/api/classes")

    def save_class(self, class_data: Dict) -> Dict:
        created = self._request("POST", "/api/classes", json=class_data)
        self.cache.invalidate(CLASSES)
        return created

    def update_class(self, class_id: str, changes: Dict) -> Dict:
        updated = self._request("PUT", f"/api/classes/{class_id}", json=changes)
        self.cache.invalidate(CLASSES)
        return updated

    def delete_class(self, class_id: str) -> None:
        self._request("DELETE", f"/api/classes/{class_id}")
        self.cache.invalidate(CLASSES, STUDENTS)

    def delete_all_classes(self) -> None:
        self._request("DELETE", "/api/classes")
        self.cache.invalidate(CLASSES, STUDENTS)

    def save_classes_bulk(self, classes: List[Dict]) -> Dict:
        result = self._request("POST", "/api/classes/bulk", json={"classes": classes})
        self.cache.invalidate(CLASSES)
        return result

    # --- Students ---

    def get_students(self) -> List[Dict]:
        return self._cached(STUDENTS, "/api/students")

    def save_student(self, student: Dict) -> Dict:
        created = self._request("POST", "/api/students", json=student)
        self.cache.invalidate(STUDENTS, CLASSES)
        return created

    def update_student(self, student_id: str, changes: Dict) -> Dict:
        updated = self._request("PUT", f"/api/students/{student_id}", json=changes)
        self.cache.invalidate(STUDENTS, CLASSES)
        return updated

    def delete_student(self, student_id: str) -> None:
        self._request("DELETE", f"/api/students/{student_id}")
        self.cache.invalidate(STUDENTS, CLASSES)

    def delete_all_students(self) -> None:
        self._request("DELETE", "/api/students")
        self.cache.invalidate(STUDENTS, CLASSES)

    def save_students_bulk(self, students: List[Dict], confirm: Callable[[int], bool] = None) -> Dict:
        """
        Uploads students, handling the invalid-class confirmation round-trip.
        When the server reports unknown class codes, `confirm(invalid_count)`
        decides whether to resend with confirm=true. Without a callback, or
        when it returns False, ImportAborted is raised and nothing is stored.
        """
        try:
            result = self._request("POST", "/api/students/bulk", json={"students": students})
        except EduGuruAPIError as exc:
            if exc.status_code != 409 or not exc.body.get("requiresConfirmation"):
                raise
            invalid = exc.body.get("invalidCount", 0)
            if confirm is None or not confirm(invalid):
                logger.info("Student import aborted by caller (%d invalid class references)", invalid)
                raise ImportAborted(invalid) from exc
            result = self._request("POST", "/api/students/bulk", json={"students": students, "confirm": True})
        self.cache.invalidate(STUDENTS, CLASSES)
        return result

    # --- Subjects ---

    def get_subjects(self) -> List[str]:
        return self._cached(SUBJECTS, "/api/subjects")

    def save_subject(self, name: str) -> None:
        self._request("POST", "/api/subjects", json={"name": name})
        self.cache.invalidate(SUBJECTS)

    def delete_subject(self, name: str) -> None:
        self._request("DELETE", f"/api/subjects/{quote(name, safe='')}")
        self.cache.invalidate(SUBJECTS)

    def delete_all_subjects(self) -> None:
        self._request("DELETE", "/api/subjects")
        self.cache.invalidate(SUBJECTS)

    def save_subjects_bulk(self, subjects: List[str]) -> Dict:
        result = self._request("POST", "/api/subjects/bulk", json={"subjects": subjects})
        self.cache.invalidate(SUBJECTS)
        return result

    # --- Records (never cached) ---

    def save_attendance_bulk(self, records: List[Dict]) -> Dict:
        return self._request("POST", "/api/attendance/bulk", json={"records": records})

    def save_scores_bulk(self, scores: List[Dict]) -> Dict:
        return self._request("POST", "/api/scores/bulk", json={"scores": scores})
