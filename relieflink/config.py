from pydantic_settings import BaseSettings
from typing import Literal, Optional


class Settings(BaseSettings):
    # App
    app_name: str = "ReliefLink"
    debug: bool = False
    log_level: str = "INFO"

    # AI - Gemini (message extraction)
    google_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    llm_timeout_seconds: float = 30.0
    # auto = Gemini when google_api_key is set, fixed fallback otherwise
    extractor_backend: Literal["auto", "gemini", "fallback"] = "auto"

    # Geocoding: disable jitter for reproducible coordinates (tests, demos)
    geocode_jitter: bool = True

    # LangSmith Monitoring
    langchain_tracing_v2: bool = True
    langchain_api_key: Optional[str] = None
    langchain_project: str = "relieflink"

    class Config:
        env_file = ".env"


settings = Settings()
