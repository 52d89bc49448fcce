"""ActiveForm - 统一配置读取与校验.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 环境变量统一使用 `ACTIVE_FORM_` 前缀.
- 生产环境默认输出 JSON 日志,显式配置时以配置为准.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from activeform.constants.system_constants import LogLevel

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

APP_VERSION = "0.3.0"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "console"

LOG_FORMATS = ("console", "json")


class Settings(BaseSettings):
    """运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="ACTIVE_FORM_ENV")
    app_version: str = APP_VERSION

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="ACTIVE_FORM_LOG_LEVEL")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT, validation_alias="ACTIVE_FORM_LOG_FORMAT")

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        try:
            return LogLevel(value.upper()).value
        except ValueError:
            raise ValueError(f"无效的日志级别: {value}") from None

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        normalized = value.lower()
        if normalized not in LOG_FORMATS:
            raise ValueError(f"不支持的日志格式: {value}")
        return normalized

    @model_validator(mode="after")
    def _apply_environment_defaults(self) -> Settings:
        environment_normalized = self.environment.strip().lower()
        if environment_normalized == "production" and "log_format" not in self.model_fields_set:
            object.__setattr__(self, "log_format", "json")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"
