"""Configuration loading for insertdox."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from insertdox.buffer import DEFAULT_BUFFER_CAPACITY
from insertdox.declarators import DEFAULT_TYPE_CAPACITY
from insertdox.errors import ConfigError
from insertdox.yaml_utils import load_yaml


class AnnotateOptions(BaseModel):
    """Options that stay fixed while one stream is annotated."""

    model_config = ConfigDict(frozen=True)

    boilerplate: Optional[str] = None
    prototypes_only: bool = False
    filename: Optional[str] = None
    buffer_capacity: int = Field(default=DEFAULT_BUFFER_CAPACITY, ge=1)
    type_capacity: int = Field(default=DEFAULT_TYPE_CAPACITY, ge=0)
    mined_order: Literal["reverse", "source"] = "reverse"
    emit_notes: bool = False
    encoding: str = "utf-8"


class FilesConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    temp_suffix: str = ".tmp"
    backup_suffix: str = ".bak"

    @field_validator("temp_suffix", "backup_suffix")
    @classmethod
    def validate_suffix(cls, value: str) -> str:
        if not value:
            raise ValueError("File suffixes must not be empty")
        return value


class InsertdoxConfig(BaseModel):
    version: int = 1
    options: AnnotateOptions = AnnotateOptions()
    files: FilesConfig = FilesConfig()

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: int) -> int:
        if value != 1:
            raise ValueError("Only version 1 config is supported")
        return value


def load_config(path: str) -> InsertdoxConfig:
    try:
        payload = load_yaml(path)
        config = InsertdoxConfig(**payload)
    except (OSError, ValueError, ValidationError) as exc:
        raise ConfigError(f"invalid config '{path}': {exc}") from exc
    boilerplate = config.options.boilerplate
    if boilerplate and not Path(boilerplate).expanduser().is_absolute():
        resolved = (Path(path).resolve().parent / boilerplate).resolve()
        options = config.options.model_copy(update={"boilerplate": str(resolved)})
        config = config.model_copy(update={"options": options})
    return config
