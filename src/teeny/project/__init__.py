# Copyright 2026 Teeny Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration for Teeny."""

from teeny.project.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    ProjectConfig,
    find_project_config,
    load_project_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ProjectConfig",
    "find_project_config",
    "load_project_config",
]
