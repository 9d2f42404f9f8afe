from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings."""

    # Credentials
    api_key: str | None = None

    # API endpoint
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Models
    default_model: str = "models/gemini-2.0-flash"
    pro_model: str = "models/gemini-2.0-pro"

    # Timeouts (seconds)
    request_timeout: float = 300.0

    class Config:
        env_prefix = "GEMINI_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
