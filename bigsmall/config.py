from pydantic_settings import BaseSettings
import os

DEFAULT_FEED_URL = "https://draw.ar-lottery01.com/WinGo/WinGo_30S/GetHistoryIssuePage.json"


class Settings(BaseSettings):
    db_dsn: str = os.getenv("DB_DSN", "sqlite:///./data/bigsmall.db")
    model_path: str = os.getenv("MODEL_PATH", "./data/model.joblib")
    feed_url: str = os.getenv("FEED_URL", DEFAULT_FEED_URL)
    poll_seconds: float = float(os.getenv("POLL_SECONDS", 4))
    feed_timeout: float = float(os.getenv("FEED_TIMEOUT", 10))
    poll_on_startup: bool = os.getenv("POLL_ON_STARTUP", "0") in ("1", "true", "True")
    history_limit: int = int(os.getenv("HISTORY_LIMIT", 100))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    api_key: str | None = os.getenv("API_KEY")

settings = Settings()
