# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the ``.optspec.yaml`` project file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".optspec.yaml"


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class BuiltinOptions:
    """Builtin options added to every compiled program."""

    help: bool = False
    version: str | None = None
    quiet: bool = False
    verbose: bool = False
    debug: bool = False


@dataclass
class OptSpecConfig:
    """The parsed project configuration.

    Attributes:
        program_name: Program name used in messages; the usage file name
            when unset.
        float: Whether options may float to enclosing commands.
        build_directory: Directory for compiled artifacts.
        builtin_options: Builtin options to add.
    """

    program_name: str | None = None
    float: bool = True
    build_directory: str = ".optspec-build"
    builtin_options: BuiltinOptions = field(default_factory=BuiltinOptions)


def load_config(path: Path) -> OptSpecConfig:
    """Load and parse a configuration file.

    Args:
        path: Path to the ``.optspec.yaml`` file.

    Returns:
        An OptSpecConfig instance populated from the file.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def find_config(directory: Path) -> OptSpecConfig:
    """Return the configuration in *directory*, or the defaults if it has none."""
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return OptSpecConfig()
    return load_config(path)


def parse_config(text: str, source_label: str = "<string>") -> OptSpecConfig:
    """Parse configuration YAML text into an OptSpecConfig.

    An empty document yields the default configuration.

    Raises:
        ConfigError: If the YAML is invalid or a field has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return OptSpecConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: config must be a YAML mapping")

    config = OptSpecConfig()
    config.program_name = _optional_string(data, "program-name", source_label)
    config.float = _optional_bool(data, "float", source_label, default=True)
    config.build_directory = _optional_string(data, "build-directory", source_label) or config.build_directory

    if "builtin-options" in data:
        config.builtin_options = _parse_builtin_options(data["builtin-options"], source_label)
    return config


# ################
# Implementation
# ################


def _optional_string(mapping: dict[str, object], key: str, source_label: str) -> str | None:
    """Extract an optional string field from a mapping, raising ConfigError on a wrong type."""
    if key not in mapping:
        return None
    value = mapping[key]
    if not isinstance(value, str):
        raise ConfigError(f"{source_label}: '{key}' must be a string")
    return value


def _optional_bool(mapping: dict[str, object], key: str, source_label: str, default: bool) -> bool:
    """Extract an optional boolean field from a mapping, raising ConfigError on a wrong type."""
    if key not in mapping:
        return default
    value = mapping[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{source_label}: '{key}' must be a boolean")
    return value


def _parse_builtin_options(entry: object, source_label: str) -> BuiltinOptions:
    location = f"{source_label}: builtin-options"
    if not isinstance(entry, dict):
        raise ConfigError(f"{location} must be a YAML mapping")

    unknown = sorted(set(entry) - {"help", "version", "quiet", "verbose", "debug"})
    if unknown:
        raise ConfigError(f"{location}: unknown option '{unknown[0]}'")

    version = entry.get("version")
    if version is not None and (isinstance(version, bool) or not isinstance(version, (str, int, float))):
        raise ConfigError(f"{location}: 'version' must be a string")
    return BuiltinOptions(
        help=_optional_bool(entry, "help", location, default=False),
        version=None if version is None else str(version),
        quiet=_optional_bool(entry, "quiet", location, default=False),
        verbose=_optional_bool(entry, "verbose", location, default=False),
        debug=_optional_bool(entry, "debug", location, default=False),
    )
