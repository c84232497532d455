import os
from pydantic_settings import BaseSettings

PACKAGE_DIR = os.path.dirname(os.path.dirname(__file__))


class Settings(BaseSettings):
    # 🧠 App Info
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "TicketApp")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # 📦 File storage (users.json + tickets.json)
    STORAGE_DIR: str = os.getenv("STORAGE_DIR", "storage")
    TEMPLATES_DIR: str = os.getenv("TEMPLATES_DIR", os.path.join(PACKAGE_DIR, "templates"))

    # 🔒 Session cookie
    SECRET_KEY: str = os.getenv("SECRET_KEY", "changeme")
    SESSION_COOKIE: str = os.getenv("SESSION_COOKIE", "ticketapp_session")
    SESSION_MAX_AGE: int = int(os.getenv("SESSION_MAX_AGE", 14 * 24 * 60 * 60))

    # 🕓 Logs
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
