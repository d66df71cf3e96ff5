from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # "current" = 45/25/20/10 with content quality, "legacy" = 40/25/20/15 with format parseability
    scoring_scheme: Literal["current", "legacy"] = "current"
    keyword_count: int = 0  # 0 = derive from JD length and section count
    fuzzy_match_threshold: int = 90  # rapidfuzz ratio; 100 disables fuzzy matching
    stuffing_threshold: int = 5  # occurrences of a single keyword flagged as stuffing
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
