# /eduguru/core/state.py

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class AppState:
    """
    Facts established once during startup and read by request handlers.

    `db_connected` is False when the database could not be reached at boot
    ("demo mode"); data routes then answer 503 instead of failing one by one.
    """
    db_connected: bool = False
    ai_enabled: bool = False
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
