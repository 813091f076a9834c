"""Application settings loaded from .env file."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage
    STORAGE_BACKEND: str = "sql"                 # sql | memory
    DATABASE_URL: str = "sqlite:///./refineai.db"

    # Uploads
    UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    QUOTE_PHOTO_REQUIRED: bool = True

    # LLM providers
    GEMINI_API_KEY: str = ""
    GEMINI_HOST: str = "https://generativelanguage.googleapis.com"
    GEMINI_MODEL: str = "gemini-1.5-flash"
    OPENAI_API_KEY: str = ""
    OPENAI_HOST: str = "https://api.openai.com"
    OPENAI_MODEL: str = "gpt-4o-mini"
    LLM_TIMEOUT_SECONDS: int = 60
    LLM_MAX_ATTEMPTS: int = 2
    ANALYSIS_GENERATE_PREVIEW: bool = False

    # Chat
    CHAT_USE_LLM: bool = False
    CHAT_HISTORY_LIMIT: int = 20

    # Admin
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: str = ""                # "salt$hex", see core.auth.hash_password
    ADMIN_TOKEN_TTL_MINUTES: int = 60
    LOGIN_MAX_FAILURES: int = 5
    LOGIN_WINDOW_SECONDS: int = 300

    # Webhook
    WEBHOOK_TIMEOUT_SECONDS: int = 10

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    def provider_api_key(self, provider: str) -> str:
        """Environment fallback key for an LLM provider."""
        if provider == "openai":
            return self.OPENAI_API_KEY
        return self.GEMINI_API_KEY


settings = Settings()
