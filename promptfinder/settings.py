# promptfinder/settings.py
import os
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="PromptFinder Search")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # storage
    DB_PATH: str = Field(default="data/db/prompts.db")
    STORE_TIMEOUT_SECONDS: float = Field(default=10.0)

    # search behaviour (see promptfinder.search.config.SearchConfig)
    SEARCH_CONFIG_PATH: Optional[str] = None
    CANDIDATE_CAP: int = Field(default=1000)
    DEFAULT_LIMIT: int = Field(default=20)
    MAX_LIMIT: int = Field(default=100)
    MATCH_TOLERANCE: float = Field(default=0.4)
    MIN_RAW_SCORE: float = Field(default=0.02)

    # ranking constants
    EXACT_MATCH_SCORE: float = Field(default=0.001)
    PREFIX_MATCH_SCORE: float = Field(default=0.01)
    MULTI_FIELD_DECAY: float = Field(default=0.95)

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
