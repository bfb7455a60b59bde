"""
Настройка логирования приложения.

``setup_logging`` подключает к корневому логгеру консольный обработчик.
В режиме разработки пишется всё начиная с DEBUG в читаемом виде,
в production используется уровень из настроек и формат ``key=value``,
который удобно разбирать сборщиками логов. Повторный вызов ничего не делает.
"""

import logging
from typing import Optional

DEVELOPMENT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
PRODUCTION_FORMAT = (
    'ts=%(asctime)s level=%(levelname)s logger=%(name)s msg="%(message)s"'
)


def setup_logging(env: str = "development", level: Optional[str] = None) -> None:
    """Настройка корневого логгера"""
    logger = logging.getLogger()
    if logger.handlers:
        # Уже настроено (повторный create_app, тесты)
        return

    if env.lower() == "production":
        fmt = PRODUCTION_FORMAT
        numeric_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    else:
        fmt = DEVELOPMENT_FORMAT
        numeric_level = logging.DEBUG

    logger.setLevel(numeric_level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
