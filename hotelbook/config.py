import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "HotelBook")
    # Core settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development").lower()
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Session
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "hotelbook_session")
    SESSION_MAX_AGE_DAYS: int = int(os.getenv("SESSION_MAX_AGE_DAYS", "30"))

    # Record files
    DATA_DIR: str = os.getenv("DATA_DIR", "./data")

    # Default admin bootstrap
    ADMIN_DEFAULT_PASSWORD: str = os.getenv("ADMIN_DEFAULT_PASSWORD", "admin123")
    ADMIN_PASSWORD_MIN_LENGTH: int = int(os.getenv("ADMIN_PASSWORD_MIN_LENGTH", "6"))

settings = Settings()
