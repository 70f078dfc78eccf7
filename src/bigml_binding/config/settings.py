# Copyright 2025 iGenius S.p.A
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized environment configuration for bigml-binding.

    Env var naming: BIGML_<FIELD_NAME>.
    A .env file in CWD or ~/.bigml/.env is read automatically.
    """

    model_config = SettingsConfigDict(
        env_prefix="BIGML_",
        env_file=(".env", "~/.bigml/.env"),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # --- General -------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # --- Credentials ---------------------------------------------------------
    username: str | None = Field(
        default=None,
        description="Account name appended to every request as `username=`",
    )  # BIGML_USERNAME
    api_key: SecretStr | None = Field(
        default=None,
        description="API key appended to every request as `api_key=`",
    )  # BIGML_API_KEY

    # --- Endpoint ------------------------------------------------------------
    dev_mode: bool = Field(
        default=False,
        description="Send requests to the development environment (/dev/ prefix)",
    )  # BIGML_DEV_MODE
    protocol: Literal["https", "http"] = "https"
    domain: str = Field(default="bigml.io", min_length=1)
    api_version: str = Field(default="andromeda", min_length=1)
    http_timeout_s: float = Field(
        default=30.0,
        gt=0,
        description="Timeout (seconds) for every HTTP request",
    )

    # --- Readiness polling ---------------------------------------------------
    wait_interval_ms: int = Field(
        default=3000,
        ge=0,
        description="Milliseconds between readiness checks of a dependency before creation",
    )
    max_retries: int = Field(
        default=10,
        ge=0,
        description="Maximum number of readiness checks before creating anyway",
    )
    poll_backoff: Literal["fixed", "exponential"] = Field(
        default="fixed",
        description="How the interval between readiness checks evolves",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached accessor. Call this wherever you need settings.
    Tests can `cache_clear()` before reading to pick up monkeypatched env.
    """
    return Settings()


def reload_settings_cache() -> None:
    get_settings.cache_clear()  # type: ignore[attr-defined]
