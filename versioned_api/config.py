"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - default_version is always one of valid_versions
    - base_path always starts and ends with '/'
    - get_settings() is cached (lru_cache) - single instance per process

Design Decisions:
    - base_path is shared by versioning and docs
    - Defaults reproduce the sample server: localhost:3000, versions 1 and 2, v2 default
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from versioned_api.core.domain_types import DocsGrouping
from versioned_api.core.openapi_transform import PathReplacement
from versioned_api.core.versioning import VersionOptions


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "localhost"
    port: int = Field(3000, ge=0, le=65535)

    # Versioning
    base_path: str = "/api/"
    valid_versions: list[int] = [1, 2]
    default_version: int = 2
    vendor_name: str = "mysuperapi"

    # Documentation
    docs_title: str = "Test API Documentation"
    docs_description: str = "This is a sample example of API documentation."
    docs_version: str = "1.0.0"
    docs_path_prefix_size: int = Field(3, ge=1)
    docs_grouping: DocsGrouping = DocsGrouping.PATH
    docs_path_replacements: list[PathReplacement] = []
    docs_security_definitions: dict[str, dict[str, Any]] = {
        "jwt": {"type": "apiKey", "name": "Authorization", "in": "header"},
    }
    docs_dereference: bool = False
    docs_json_path: str = "/swagger.json"
    docs_ui_path: str = "/documentation"

    # Observability
    ops_interval_ms: int = Field(1000, gt=0)
    log_level: str = "INFO"
    log_format: str = "json"
    log_events: dict[str, str | list[str]] = {"log": "*", "response": "*"}

    @field_validator("base_path")
    @classmethod
    def normalize_base_path(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("/"):
            v = "/" + v
        if not v.endswith("/"):
            v = v + "/"
        return v

    @field_validator("valid_versions")
    @classmethod
    def check_valid_versions(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("valid_versions must not be empty")
        if any(version < 1 for version in v):
            raise ValueError("versions must be positive integers")
        return sorted(set(v))

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @model_validator(mode="after")
    def check_default_version(self) -> "Settings":
        if self.default_version not in self.valid_versions:
            raise ValueError(
                f"default_version {self.default_version} is not in "
                f"valid_versions {self.valid_versions}",
            )
        return self

    def version_options(self) -> VersionOptions:
        return VersionOptions(
            base_path=self.base_path,
            valid_versions=tuple(self.valid_versions),
            default_version=self.default_version,
            vendor_name=self.vendor_name,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
