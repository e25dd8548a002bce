"""
Configuration settings for the task frontend.
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Frontend configuration settings"""

    # Task API
    task_api_url: str = os.getenv("TASK_API_URL", "http://localhost:8000/api")
    request_timeout: float = float(os.getenv("REQUEST_TIMEOUT", "30"))

    # UI timings, milliseconds
    search_debounce_ms: int = int(os.getenv("SEARCH_DEBOUNCE_MS", "300"))
    toast_duration_ms: int = int(os.getenv("TOAST_DURATION_MS", "4000"))
    toast_fade_ms: int = int(os.getenv("TOAST_FADE_MS", "300"))


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance"""
    return settings
