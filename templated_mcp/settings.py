from __future__ import annotations

from functools import lru_cache
from typing import ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .schema import Scope
from .shard import constants as C


class Settings(BaseSettings):
    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(env_nested_delimiter="__")

    templated_api_key: str | None = Field(default=None, description="API key for Templated (stdio mode, or fallback for HTTP mode)")
    templated_folder_id: str | None = Field(default=None, description="Restrict all template operations to this folder")
    templated_external_id: str | None = Field(default=None, description="Restrict all template operations to this external ID")

    templated_api_base_url: str = Field(default=C.DEFAULT_API_BASE_URL, description="Base URL of the Templated REST API")
    templated_request_timeout: float | None = Field(default=None, description="Per-request timeout in seconds; unset means no timeout")

    host: str = Field(default="0.0.0.0", description="Host to bind to in HTTP mode")
    port: int | None = Field(default=None, description="Port to listen on; enables HTTP mode when set")

    openai_verification_token: str | None = Field(default=None, description="Token served at the OpenAI apps domain-verification path")

    log_level: str = Field(default="INFO", description="Log level for the server logger")

    @property
    def use_http(self) -> bool:
        """Determine if the HTTP transport should be used instead of stdio."""
        return bool(self.port)

    def default_scope(self) -> Scope:
        """Scope configured through the environment."""
        return Scope(
            api_key=self.templated_api_key or "",
            folder_id=self.templated_folder_id or None,
            external_id=self.templated_external_id or None,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
