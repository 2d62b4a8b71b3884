# /eduguru/core/errors.py

"""
Domain exceptions raised by the service layer.

`main.py` installs one exception handler per class so routers do not have
to repeat the HTTP mapping. Every response body carries an `error` string.
"""


class EduGuruError(Exception):
    status_code = 500
    public_message = "Internal server error"

    def to_body(self) -> dict:
        return {"error": self.public_message}


class ReconciliationError(EduGuruError):
    """A bulk batch failed and was rolled back. Nothing from it was stored."""
    public_message = "Import failed. No changes were saved; please retry the whole batch."

    def __init__(self, kind: str, message: str = ""):
        self.kind = kind
        super().__init__(message or f"Bulk {kind} import failed")


class OwnershipConflictError(EduGuruError):
    """An incoming id already belongs to a different user."""
    status_code = 409

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} id '{record_id}' is already in use")

    def to_body(self) -> dict:
        return {"error": str(self)}


class InvalidClassReferenceError(EduGuruError):
    """Raised under the 'reject' policy when students point at unknown classes."""
    status_code = 400

    def __init__(self, invalid_count: int):
        self.invalid_count = invalid_count
        super().__init__(f"{invalid_count} student(s) reference a class that does not exist")

    def to_body(self) -> dict:
        return {"error": str(self), "invalidCount": self.invalid_count}


class ConfirmationRequiredError(EduGuruError):
    """
    Raised under the 'confirm' policy: the batch was not written and the
    caller has to resend it with `confirm=true` to store the offending rows
    without a class.
    """
    status_code = 409

    def __init__(self, invalid_count: int):
        self.invalid_count = invalid_count
        super().__init__(
            f"{invalid_count} student(s) reference an unknown class code. "
            "Resend with confirm=true to import them without a class."
        )

    def to_body(self) -> dict:
        return {"error": str(self), "invalidCount": self.invalid_count, "requiresConfirmation": True}


class AIServiceUnavailableError(EduGuruError):
    status_code = 503
    public_message = "AI service unavailable"


class UnknownStudentReferenceError(EduGuruError):
    """Attendance or score rows point at students the importer does not own."""
    status_code = 400

    def __init__(self, kind: str, student_ids):
        self.kind = kind
        self.student_ids = sorted(student_ids, key=str)
        super().__init__(f"{len(self.student_ids)} {kind} row(s) reference an unknown student")

    def to_body(self) -> dict:
        return {"error": str(self), "invalidCount": len(self.student_ids)}
