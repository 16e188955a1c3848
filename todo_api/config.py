# todo_api/config.py
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# -------------------------------------------------
# Load environment variables
# -------------------------------------------------
load_dotenv()


# -------------------------------------------------
# Settings
# -------------------------------------------------
class Settings(BaseSettings):
    # App
    APP_HOST: str = "0.0.0.0"
    PORT: int = 3001
    CORS_ORIGINS: str = "*"          # comma-separated, "*" for any origin

    # Remote KV (Cloudflare Workers KV REST API)
    KV_ACCOUNT_ID: str | None = None
    KV_NAMESPACE_ID: str | None = None
    KV_API_TOKEN: str | None = None
    KV_BASE_URL: str = "https://api.cloudflare.com/client/v4"
    KV_KEY: str = "tasks"
    KV_TIMEOUT_SECONDS: float = 10.0

    # Local fallback
    LOCAL_DATA_FILE: Path = Path("local-tasks.json")

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    # -------------------------------------------------
    # Helpers
    # -------------------------------------------------
    def cors_origin_list(self) -> list[str]:
        origins = [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    def kv_enabled(self) -> bool:
        return bool(self.KV_ACCOUNT_ID and self.KV_NAMESPACE_ID and self.KV_API_TOKEN)


settings = Settings()
