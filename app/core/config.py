from pydantic_settings import BaseSettings
from typing import List, Optional
from pathlib import Path


class Settings(BaseSettings):
    # Database - local SQLite by default, point at Postgres in production
    DATABASE_URL: str = "sqlite:///./waitlist.db"
    # Create tables on boot; production schemas are managed by Alembic
    AUTO_CREATE_TABLES: bool = True

    # Resend (Email). Leaving either unset disables signup notifications.
    RESEND_API_KEY: Optional[str] = None
    SECRET_RECIPIENT_MAIL: Optional[str] = None
    EMAIL_FROM: str = "Anveshan Waitlist <onboarding@resend.dev>"
    # Upper bound on how long a signup response waits for the email provider
    EMAIL_TIMEOUT_SECONDS: float = 5.0

    # App Settings
    DEBUG: bool = False
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5000",
        "http://127.0.0.1:3000",
    ]

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.RESEND_API_KEY and self.SECRET_RECIPIENT_MAIL)

    class Config:
        # Use absolute path to .env file
        env_file = Path(__file__).parent.parent.parent / ".env"
        env_file_encoding = 'utf-8'


settings = Settings()
