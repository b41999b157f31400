"""Configuration models.

The configuration is persisted as JSON and validated through these models, so
``config set`` can only write values the application understands.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class StoreConfig(BaseModel):
    """Document store configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite vault path (default: user data dir)"
    )
    conflict_retries: int = Field(default=3, ge=1, le=20)


class AIConfig(BaseModel):
    """Language model configuration for the impact indicator generator."""

    endpoint: str = Field(default="https://generativelanguage.googleapis.com")
    model: str = Field(default="gemini-1.5-flash")
    api_key_env: str = Field(default="GOOGLE_API_KEY")
    timeout: int = Field(default=30, ge=1)
    retry: int = Field(default=2, ge=0)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http(s) URL")
        return v.rstrip("/")


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty", pattern="^(pretty|table|json|yaml)$")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main Projexia configuration."""

    current_user_id: str | None = Field(
        default=None, description="User the CLI acts as"
    )
    store: StoreConfig = Field(default_factory=StoreConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def get_value(self, key: str) -> Any:
        """Get a value by dotted key (e.g. ``ai.model``)."""
        node: Any = self
        for part in key.split("."):
            if not isinstance(node, BaseModel) or part not in type(node).model_fields:
                raise KeyError(key)
            node = getattr(node, part)
        return node

    def with_value(self, key: str, value: Any) -> AppConfig:
        """Return a validated copy with the dotted key set to ``value``."""
        data = self.model_dump()
        parts = key.split(".")
        self.get_value(key)
        target = data
        for part in parts[:-1]:
            target = target[part]
        target[parts[-1]] = value
        return AppConfig.model_validate(data)
