from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Resume Studio"
    app_version: str = "0.1.0"
    debug: bool = False

    # Uploads
    max_upload_size_mb: int = 10

    # Workspaces
    max_workspaces: int = 200

    # Generation
    default_page_count: int = 1
    max_page_count: int = 3

    # AI / Gemini
    google_ai_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    generation_temperature: float = 0.2

    # Server
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache
def get_settings() -> Settings:
    return Settings()
