"""
Application settings.

Every value can be overridden through a `CHECKERS_<FIELD NAME>` environment variable, ex. CHECKERS_COMMENTARY_PORT=8080.
The domain layer never reads these: it only receives plain numbers / booleans from the service and terminal layers.
"""

import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.core.exceptions import ConfigError

ENV_PREFIX = "CHECKERS_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # --- commentary service (a local text generation server, Ollama-style API) ---
    commentary_enabled: bool = True
    commentary_host: str = "localhost"
    commentary_port: int = Field(default=11434, ge=1, le=65535)
    commentary_model: str = "llama3"
    commentary_timeout: float = Field(default=10.0, gt=0)

    # --- gameplay ---
    ai_delay: float = Field(default=0.5, ge=0)

    # --- infrastructure ---
    database_url: str = "sqlite:///checkers.db"
    log_level: str = "INFO"
    log_file: str = "logs/checkers.log"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {','.join(LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def commentary_url(self) -> str:
        return f"http://{self.commentary_host}:{self.commentary_port}"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect the CHECKERS_* variables and let pydantic do the parsing / validation."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if environ.get(f"{ENV_PREFIX}{name.upper()}", "").strip() != ""
        }
        try:
            return cls.model_validate(values)
        except ValidationError as error:
            raise ConfigError(f"Invalid configuration: {error}") from error
