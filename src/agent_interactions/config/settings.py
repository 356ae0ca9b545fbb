from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Which persisted region the interaction history lives in.
    storage_context: Literal["workspace", "global"] = Field(
        default="workspace", alias="STORAGE_CONTEXT"
    )
    kv_backend: str = Field(default="file", alias="KV_BACKEND")

    # File-based key-value persistence
    workspace_dir: str = Field(default=".", alias="WORKSPACE_DIR")
    workspace_storage_dirname: str = Field(
        default=".agent_interactions",
        alias="WORKSPACE_STORAGE_DIRNAME",
    )
    global_storage_dir: str = Field(
        default="~/.agent_interactions",
        alias="GLOBAL_STORAGE_DIR",
    )

    # Database configuration
    database_url: str = Field(
        default="sqlite:///./agent_interactions.db",
        alias="DATABASE_URL",
    )
    database_echo: bool = Field(
        default=False,
        alias="DATABASE_ECHO",
    )
    database_auto_migrate: bool = Field(
        default=True,
        alias="DATABASE_AUTO_MIGRATE",
    )

    log_level: str = Field(default="WARNING", alias="LOG_LEVEL")


@lru_cache
def get_settings() -> Settings:
    return Settings()
