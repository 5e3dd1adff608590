import os
import logging
from pydantic import BaseModel, Field
from typing import List
from dotenv import load_dotenv

load_dotenv()

class Config(BaseModel):
    app_name: str = "HR Payroll Console"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./database.db")

    # Placeholder login (single configured credential pair)
    admin_username: str = os.getenv("ADMIN_USERNAME", "admin")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "dev-only-admin-password")
    login_rate_limit: str = os.getenv("LOGIN_RATE_LIMIT", "10/minute")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "json")
    database_echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"

    # CORS: comma-separated origins loaded from env.
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

    # Reminders
    reminder_due_soon_days: int = int(os.getenv("REMINDER_DUE_SOON_DAYS", "3"))

    # Upload limits consumed by the external storage collaborator
    upload_max_bytes: int = 5 * 1024 * 1024
    upload_allowed_types: List[str] = [
        "image/jpeg",
        "image/png",
        "image/webp",
        "application/pdf",
    ]

    # Audit log listing
    audit_default_limit: int = 100

settings = Config()

# --- Startup Validation for Production ---
_logger = logging.getLogger(__name__)
if settings.environment not in ("development", "testing"):
    if "dev-only" in settings.admin_password:
        raise RuntimeError(
            "FATAL: ADMIN_PASSWORD must be set for non-development environments."
        )
elif "dev-only" in settings.admin_password:
    _logger.warning("⚠ Using insecure default ADMIN_PASSWORD; only acceptable in development.")
