import logging

from todo_api.core.todo_store import TodoStore
from todo_api.model import TodoConfig


def configure_logging(config: TodoConfig) -> None:
    """Log Level für Lambda setzen (der Root Logger hat dort schon einen Handler)"""
    logger = logging.getLogger()
    logger.setLevel(config.log_level.upper())


def build_store(config: TodoConfig) -> TodoStore:
    configure_logging(config)
    return TodoStore.from_config(config)
