from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Centralized application settings leveraging environment overrides.
    """

    app_name: str = "Review Advisor"
    log_level: str = "WARNING"

    # Generation endpoint
    ollama_url: str = "http://localhost:11434/api/generate"
    ollama_model: str = "gemma3:4b"
    generation_timeout_seconds: Optional[float] = Field(None, gt=0)

    # Document store
    firestore_base_url: str = "https://firestore.googleapis.com/v1"
    firestore_project_id: str = "java2025-91d74"
    firestore_database: str = "(default)"
    restaurants_collection: str = "restaurants"
    reviews_collection: str = "reviews"
    firestore_page_size: Optional[int] = Field(None, ge=1)
    store_timeout_seconds: Optional[float] = Field(None, gt=0)

    # Review extraction
    review_field: str = "comment"
    synthetic_tag_prefix: str = "GUIDED_DINING_"

    # Language conformance
    target_script: Literal["han", "hiragana", "katakana", "hangul"] = "han"
    conformance_threshold: float = Field(0.3, ge=0.0, le=1.0)

    # Conversation
    exit_keyword: str = "exit"
    prompts_file: Optional[Path] = None

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
