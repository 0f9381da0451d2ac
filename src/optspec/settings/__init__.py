# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration for the optspec command line tool."""

from optspec.settings.config import (
    CONFIG_FILE_NAME,
    BuiltinOptions,
    ConfigError,
    OptSpecConfig,
    find_config,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "BuiltinOptions",
    "ConfigError",
    "OptSpecConfig",
    "find_config",
    "load_config",
    "parse_config",
]
