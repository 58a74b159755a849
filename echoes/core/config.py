"""Конфигурация Tree of Echoes.

Переменные окружения с префиксом ECHOES_ (и опциональный .env):
- ECHOES_DEFAULT_BASE_URI: base URI для новых Tree, если не передан явно
- ECHOES_TEMPLATE_NAME / ECHOES_TEMPLATE_VERSION: шаблон коллекций (влияет на адреса!)
- ECHOES_LOG_LEVEL: уровень логирования для configure_logging
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class EchoesSettings(BaseSettings):
    """Центральная конфигурация."""

    model_config = SettingsConfigDict(
        env_prefix="ECHOES_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    default_base_uri: str = Field(
        default="",
        description="Base URI, который получает Tree при deploy без явного значения.",
    )
    template_name: str = Field(
        default="Echo",
        min_length=1,
        description="Имя шаблона коллекции (часть init code hash).",
    )
    template_version: str = Field(
        default="1",
        min_length=1,
        description="Версия шаблона коллекции. Смена версии меняет все адреса.",
    )
    log_level: str = Field(default="info", description="debug/info/warning/error/critical")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().lower()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {v!r}, expected one of {sorted(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> EchoesSettings:
    """Кешированный экземпляр настроек (читается из окружения один раз)."""
    return EchoesSettings()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Настройка корневого логгера.

    Args:
        level: Уровень; по умолчанию из настроек (ECHOES_LOG_LEVEL)
    """
    name = (level or get_settings().log_level).lower()
    if name not in _LOG_LEVELS:
        raise ValueError(f"unknown log level {level!r}")
    logging.basicConfig(
        level=_LOG_LEVELS[name],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig не трогает root, если handlers уже есть
    logging.getLogger("echoes").setLevel(_LOG_LEVELS[name])
