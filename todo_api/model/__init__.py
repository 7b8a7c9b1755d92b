from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field


@dataclass
class AwsEnviroment:
    profile: Optional[str]
    region: Optional[str]


class Todo(BaseModel):
    """
    Ein Todo Eintrag, so wie er in der DynamoDB Tabelle liegt.

    Fehlende Felder werden mit ihren Nullwerten belegt ("" bzw. 0), damit ein
    nicht gefundener Eintrag als leerer Todo dargestellt werden kann.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    item: str = ""
    created_by: str = Field(default="", alias="createdBy")
    state: int = 0

    def to_item(self) -> dict:
        """Attribute für DynamoDB bzw. JSON Ausgabe"""
        return self.model_dump(by_alias=True)


class TodoConfig(BaseModel):
    table_name: str = Field(default="todos", min_length=1)
    aws_profile: Optional[str] = None
    aws_region: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: Path) -> "TodoConfig":
        if not path.exists():
            return cls()

        with path.open() as f:
            data = yaml.safe_load(f) or {}

        return cls.model_validate(data)

    def to_yaml(self, path: Path) -> None:
        with path.open("w") as f:
            yaml.safe_dump(self.model_dump(), f, sort_keys=False)

    @property
    def env(self) -> AwsEnviroment:
        return AwsEnviroment(
            profile=self.aws_profile,
            region=self.aws_region
        )
