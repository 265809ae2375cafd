from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Config models map YAML sections to typed structures.


class ProviderSection(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str | None = None
    version: str = "0.0.0"
    # Modules scanned for @provider_bean classes, in order.
    modules: list[str] = Field(default_factory=list)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    sink: Literal["stdout", "jsonl", "none"] = "none"
    path: str | None = None

    @model_validator(mode="after")
    def _jsonl_needs_path(self) -> LoggingConfig:
        if self.sink == "jsonl" and not self.path:
            raise ValueError("logging.path is required when logging.sink is 'jsonl'")
        return self


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    provider: ProviderSection = Field(default_factory=ProviderSection)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
