import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from todo_api.model import TodoConfig

DEFAULT_CONFIG_FILE = Path("config") / "todo.yaml"

# Umgebungsvariable -> Feld in TodoConfig
ENV_OVERRIDES = {
    "TABLE_NAME": "table_name",
    "AWS_PROFILE": "aws_profile",
    "AWS_REGION": "aws_region",
    "LOG_LEVEL": "log_level",
}


def load_config(config_file: Optional[Path] = None) -> TodoConfig:
    """
    Lädt die Konfiguration aus YAML Datei und Environment.

    Reihenfolge: Defaults, dann YAML Datei (TODO_CONFIG_FILE oder
    config/todo.yaml), dann Umgebungsvariablen inkl. .env Datei.
    """
    load_dotenv(find_dotenv(usecwd=True))

    if config_file is None:
        config_file = Path(os.getenv("TODO_CONFIG_FILE", str(DEFAULT_CONFIG_FILE)))

    try:
        config = TodoConfig.from_yaml(config_file)
        overrides = {
            field: os.environ[name]
            for name, field in ENV_OVERRIDES.items()
            if os.environ.get(name)
        }
        if overrides:
            config = TodoConfig.model_validate({**config.model_dump(), **overrides})
    except ValidationError as e:
        raise RuntimeError(f"Invalid config {config_file}:\n{e}")

    return config
