"""
Logging Setup — консольный вывод логов калькулятора

Библиотека только создаёт логгеры модулей (logging.getLogger(__name__)) и
НЕ настраивает обработчики при импорте. setup_logging() вызывается один раз
из точки входа приложения.
"""

import logging
from typing import Final

# Логгер пакета, родитель всех логгеров модулей
PACKAGE_LOGGER_NAME: Final[str] = "newton_r"

# Имя консольного обработчика (повторный вызов не добавляет второй)
CONSOLE_HANDLER_NAME: Final[str] = "newton_r.console"

LOG_FORMAT: Final[str] = (
    "%(asctime)s [%(threadName)-12.12s] [%(levelname)-5.5s]  %(message)s"
)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Подключение консольного обработчика к логгеру пакета.

    Идемпотентно: обработчик ищется по имени CONSOLE_HANDLER_NAME,
    повторный вызов только меняет уровень.

    Args:
        level: Уровень логгера пакета

    Returns:
        Логгер пакета
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)

    if any(h.name == CONSOLE_HANDLER_NAME for h in package_logger.handlers):
        return package_logger

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(console_handler)
    return package_logger
