# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the optional ``.teeny.yaml`` project file."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".teeny.yaml"


class ConfigError(Exception):
    """Raised when a project configuration file cannot be read or is invalid."""


class ProjectConfig(BaseModel):
    """Settings shared by the ``teeny`` subcommands.

    Attributes:
        output_path: Where ``teeny compile`` writes the generated C code.
        print_precision: Decimals printed for numbers by the generated code.
        echo_code: Also print the generated code to the console.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    output_path: str = Field(alias="output-path", default="out/out.c", min_length=1)
    print_precision: int = Field(alias="print-precision", default=2, ge=0, le=17)
    echo_code: bool = Field(alias="echo-code", default=False)


def load_project_config(path: Path) -> ProjectConfig:
    """Load and validate a project configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the ``.teeny.yaml`` file.

    Returns:
        A validated ProjectConfig instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: project config must be a YAML mapping")

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc


def find_project_config(directory: Path) -> ProjectConfig:
    """Load ``.teeny.yaml`` from *directory*, or return the defaults if absent.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return ProjectConfig()
    return load_project_config(path)
