import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

load_dotenv()


def _database_url():
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv("DB_HOST")
    if host:
        user = os.getenv("DB_USER")
        password = quote_plus(os.getenv("DB_PASSWORD", ""))
        port = os.getenv("DB_PORT", "5432")
        name = os.getenv("DB_NAME")
        return f"postgresql://{user}:{password}@{host}:{port}/{name}"

    return "sqlite:///./crm.db"


class Settings:
    DATABASE_URL = _database_url()

    # AUTH
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))
    COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() == "true"

    # CORS
    CORS_ORIGINS = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if o.strip()
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # AI ASSISTANT (any OpenAI-compatible endpoint)
    AI_API_KEY = os.getenv("AI_API_KEY")
    AI_BASE_URL = os.getenv("AI_BASE_URL")
    AI_MODEL = os.getenv("AI_MODEL", "gpt-4o-mini")

    # CALENDAR
    GOOGLE_CALENDAR_API_URL = os.getenv(
        "GOOGLE_CALENDAR_API_URL", "https://www.googleapis.com/calendar/v3"
    )
    CALENDAR_TIMEOUT_SECONDS = int(os.getenv("CALENDAR_TIMEOUT_SECONDS", "10"))

    # LIMITS
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 200
    IMPORT_BATCH_SIZE = 100
    MAP_ACTIVITY_LIMIT = 500

settings = Settings()
