# farmfresh/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    DATABASE_URL: str = "sqlite:///./farmfresh.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # Session cookie carrying the access token
    COOKIE_NAME: str = "access_token"
    COOKIE_SECURE: bool = False

    FRONTEND_URL: str = "http://localhost:5173"

settings = Settings()
