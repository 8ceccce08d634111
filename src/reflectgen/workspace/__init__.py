# Copyright 2026 reflectgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator configuration for reflectgen."""

from reflectgen.workspace.config import (
    CONFIG_FILE_NAME,
    GeneratorConfig,
    GeneratorConfigError,
    default_config_text,
    load_generator_config,
    parse_generator_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "GeneratorConfig",
    "GeneratorConfigError",
    "default_config_text",
    "load_generator_config",
    "parse_generator_config",
]
