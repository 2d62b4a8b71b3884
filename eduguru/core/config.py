# /eduguru/core/config.py

"""
Process-wide settings for the EduGuru backend.

Values are read once from the environment (after loading a local `.env`
file, if present) into an immutable `Settings` object. Every other module
imports the shared `settings` instance rather than calling `os.getenv`
directly.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

INVALID_CLASS_POLICIES = ("confirm", "clear", "reject")


def _resolve_database_url() -> str:
    url = os.getenv("DATABASE_URL", "")
    if url.startswith("postgres://"):
        # Older hosting providers still hand out the deprecated scheme.
        url = url.replace("postgres://", "postgresql://", 1)
    if url:
        return url

    host = os.getenv("DB_HOST")
    if host:
        user = os.getenv("DB_USER", "postgres")
        password = os.getenv("DB_PASSWORD", "")
        port = os.getenv("DB_PORT", "5432")
        name = os.getenv("DB_NAME", "eduguru")
        return f"postgresql://{user}:{password}@{host}:{port}/{name}"

    return "sqlite:///./eduguru.db"


def _resolve_invalid_class_policy() -> str:
    policy = os.getenv("INVALID_CLASS_POLICY", "confirm").strip().lower()
    if policy not in INVALID_CLASS_POLICIES:
        raise ValueError(
            f"INVALID_CLASS_POLICY must be one of {', '.join(INVALID_CLASS_POLICIES)}, got '{policy}'."
        )
    return policy


@dataclass(frozen=True)
class Settings:
    # --- Database ---
    database_url: str = _resolve_database_url()
    db_ssl: bool = os.getenv("DB_SSL", "false").lower() == "true"

    # --- Auth ---
    jwt_secret: str = os.getenv("JWT_SECRET", "eduguru-dev-secret-change-me")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    jwt_exp_days: int = int(os.getenv("JWT_EXPIRE_DAYS", "7"))
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # --- Server ---
    port: int = int(os.getenv("PORT", "3001"))
    api_url: str = os.getenv("API_URL", "http://localhost:3001")
    client_url: str = os.getenv("CLIENT_URL", "http://localhost:5173")

    # --- AI provider ---
    gemini_api_key: str = os.getenv("GEMINI_API_KEY", os.getenv("GOOGLE_API_KEY", ""))
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    # --- OAuth providers ---
    google_client_id: str = os.getenv("GOOGLE_CLIENT_ID", "")
    google_client_secret: str = os.getenv("GOOGLE_CLIENT_SECRET", "")
    github_client_id: str = os.getenv("GITHUB_CLIENT_ID", "")
    github_client_secret: str = os.getenv("GITHUB_CLIENT_SECRET", "")
    microsoft_client_id: str = os.getenv("MICROSOFT_CLIENT_ID", "")
    microsoft_client_secret: str = os.getenv("MICROSOFT_CLIENT_SECRET", "")

    # --- Import behaviour ---
    # confirm: warn and wait for the caller to resend with confirm=true
    # clear:   store offending students without a class and report the count
    # reject:  refuse the whole batch
    invalid_class_policy: str = _resolve_invalid_class_policy()

    # --- Logging ---
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    error_log_path: str = os.getenv("ERROR_LOG_PATH", "ERROR_LOG.txt")


settings = Settings()
