"""Runtime settings for the optimizer service."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gdrivereorg.workflow.client import DEFAULT_BASE_URL, DEFAULT_USER


class Settings(BaseSettings):
    """
    Settings read from the environment (and `.env`).

    Attributes:
        miso_api_key: Workflow credential; empty means local classification only.
        fallback_enabled: Fall back to the classifier when the workflow fails.
        classifier_policy: Policy used for local classification.
        empty_parent_policy: What the diff does with moves to an empty parent.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    miso_api_key: Optional[str] = None
    workflow_base_url: str = DEFAULT_BASE_URL
    workflow_user: str = DEFAULT_USER
    workflow_timeout_sec: float = Field(default=120.0, gt=0)
    fallback_enabled: bool = True

    classifier_policy: Literal["category", "extension"] = "category"
    min_group_size: int = Field(default=1, ge=1)
    relocate_existing_folders: bool = True
    empty_parent_policy: Literal["skip", "raise"] = "skip"

    service_version: str = "2.0.0"

    @property
    def has_api_key(self) -> bool:
        return bool(self.miso_api_key and self.miso_api_key.strip())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings instance."""
    return Settings()
