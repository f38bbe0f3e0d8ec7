"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from .weights import WeightConfig


class BackendConfig(BaseModel):
    base_url: str = "http://localhost:5000"
    timeout: float = 10.0


class MessagingConfig(BaseModel):
    transport: Literal["console", "emailjs"] = "console"
    endpoint: str = "https://api.emailjs.com/api/v1.0/email/send"
    service_id: str | None = None
    template_id: str | None = None
    public_key: str | None = None
    private_key: str | None = None
    timeout: float = 10.0
    parallel: bool = False


class AppConfig(BaseModel):
    backend: BackendConfig = Field(default_factory=BackendConfig)
    weights: WeightConfig = Field(default_factory=WeightConfig)
    messaging: MessagingConfig = Field(default_factory=MessagingConfig)

    def to_settings(self) -> dict[str, Any]:
        return self.model_dump(mode="python")


def load_config(raw: Any) -> AppConfig:
    if raw is None:
        return AppConfig()
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
