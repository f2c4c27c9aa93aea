"""Application configuration for the paper chat assistant."""

from pathlib import Path
from typing import Any, Optional

import requests
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from paperchat.clients.base import build_http_session


class ChatConfig(BaseSettings):  # type: ignore[misc]
    """Settings controlling context sources, the completion endpoint and HTTP behavior."""

    completion_url: Optional[str] = Field(
        None, description="Chat completion endpoint receiving the JSON POST"
    )
    api_key: Optional[str] = Field(None, description="Bearer token for the completion endpoint")
    model: str = Field("gpt-oss-20B", description="Model name sent with every request")
    temperature: float = Field(0.7, ge=0.0, le=2.0, description="Default sampling temperature")
    max_tokens: int = Field(1024, ge=1, description="Default completion token limit")

    documents_feed: str = Field("papers.json", description="Locator of the document list feed")
    personal_context: str = Field("context.txt", description="Locator of the personal context")
    content_base_url: Optional[str] = Field(
        None, description="Base URL joined to relative locators; filesystem is used when unset"
    )
    content_root: Path = Field(Path("."), description="Directory relative locators are read from")
    paper_text_dir: str = Field("paper_text", description="Fallback directory for paper texts")
    paper_text_ext: str = Field("txt", description="Fallback extension for paper texts")

    owner_name: str = Field("Md Shahidul Salim", description="Person the personal context describes")
    auto_route: bool = Field(True, description="Route questions to papers while in personal context")

    request_timeout_s: float = Field(
        30.0, gt=0, description="Default timeout (in seconds) for outbound HTTP requests"
    )
    max_attempts: int = Field(1, ge=1, description="Attempts per document fetch before giving up")
    user_agent: str = Field("paperchat", description="User-Agent header for outbound requests")

    model_config = SettingsConfigDict(env_prefix="PAPERCHAT_", env_file=".env", extra="ignore")

    def model_post_init(self, __context: Any) -> None:
        """Normalize paths to absolute locations."""

        self.content_root = self.content_root.expanduser().resolve()

    @field_validator("paper_text_ext")
    @classmethod
    def strip_extension_dot(cls, value: str) -> str:
        return value.lstrip(".")

    @field_validator("completion_url", "api_key", "content_base_url")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    def build_http_session(self) -> requests.Session:
        """Return a configured :class:`requests.Session` using the settings."""

        return build_http_session(self.user_agent)
