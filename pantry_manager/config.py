from __future__ import annotations
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Literal, Optional, List
from dotenv import load_dotenv
load_dotenv()  # populates os.environ from .env


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Recipe generation
    recipe_engine: Literal["openai", "gemini"] = "openai"
    openai_api_key: Optional[str] = None
    openai_model_suggest: str = "gpt-4o-mini"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"

    # Storage
    store_backend: Literal["json", "memory"] = "json"
    data_dir: str = "data"
    inventory_collection: str = Field("Inventory", min_length=1)
    events_file: str = "data/inventory_log.jsonl"

    # HTTP
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://127.0.0.1:3000"])
    log_level: str = "INFO"
