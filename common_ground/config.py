from pydantic import BaseModel, ConfigDict, Field
from functools import lru_cache
from typing import Optional
import os


def _optional_env(name: str) -> Optional[str]:
    raw = os.getenv(name, "").strip()
    return raw or None


class Settings(BaseModel):
    # env values come through default_factory, so they must be validated too
    model_config = ConfigDict(validate_default=True)

    # read at construction so a .env loaded before get_settings() is honoured
    catalog_dir: str = Field(default_factory=lambda: os.getenv("CATALOG_DIR", ""))
    default_bucket_limit: Optional[int] = Field(
        default_factory=lambda: _optional_env("DEFAULT_BUCKET_LIMIT"), ge=0
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
