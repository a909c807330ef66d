"""Configuration loading and parsing for strict-semver."""

from pathlib import Path
from typing import Any

import yaml

from strict_semver.bump import OPERATIONS

DEFAULT_CONFIG_FILE = "strict-semver.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


class ToolConfig:
    """Command-line configuration loaded from a YAML file."""

    def __init__(self, config_path: str | Path | None = None):
        """Load configuration from a YAML file.

        Args:
            config_path: Path to configuration file, or None for defaults only

        Raises:
            ConfigError: If the config file doesn't exist or is invalid
        """
        self._config: dict[str, Any] = {}
        self.config_path = Path(config_path) if config_path is not None else None

        if self.config_path is not None:
            if not self.config_path.exists():
                raise ConfigError(f"Configuration file not found: {self.config_path}")

            try:
                with open(self.config_path, "r") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"YAML parsing error in {self.config_path}: {e}")

            # An empty file means all defaults
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise ConfigError("Configuration must be a mapping")
            self._config = data

        self._validate_config()

    def _validate_config(self) -> None:
        """Validate types and values of the known configuration sections."""
        if "version-prefix" in self._config:
            if not isinstance(self._config["version-prefix"], str):
                raise ConfigError("'version-prefix' must be a string")

        for section in ("sort", "bump"):
            if section in self._config and not isinstance(self._config[section], dict):
                raise ConfigError(f"'{section}' must be a dictionary")

        sort = self._config.get("sort", {})
        delimiter = sort.get("delimiter")
        if delimiter is not None and (not isinstance(delimiter, str) or delimiter == ""):
            raise ConfigError("'sort.delimiter' must be a non-empty string or null")
        if "output-separator" in sort and not isinstance(sort["output-separator"], str):
            raise ConfigError("'sort.output-separator' must be a string")

        bump = self._config.get("bump", {})
        if "default" in bump and (
            not isinstance(bump["default"], str) or bump["default"] not in OPERATIONS
        ):
            raise ConfigError(
                f"'bump.default' must be one of: {', '.join(OPERATIONS)}"
            )

    def get_version_prefix(self) -> str:
        """Get the version prefix from configuration.

        Returns:
            Version prefix string (e.g., 'v') or empty string if not configured
        """
        return self._config.get("version-prefix", "")

    def strip_prefix(self, text: str) -> str:
        """Remove the configured version prefix from text, if present."""
        prefix = self.get_version_prefix()
        if prefix and text.startswith(prefix):
            return text[len(prefix):]
        return text

    def get_sort_delimiter(self) -> str | None:
        """Get the input delimiter for sorting.

        Returns:
            Delimiter string, or None to split on runs of whitespace
        """
        return self._config.get("sort", {}).get("delimiter")

    def get_output_separator(self) -> str:
        """Get the separator placed between sorted versions.

        Returns:
            Separator string or a newline as default
        """
        return self._config.get("sort", {}).get("output-separator", "\n")

    def get_default_bump(self) -> str:
        """Get the bump used when no bump type is requested.

        Returns:
            Operation name or 'patch' as default
        """
        return self._config.get("bump", {}).get("default", "patch")


def load_config(config_path: str | Path | None = None) -> ToolConfig:
    """Load configuration from file.

    Without an explicit path, strict-semver.yaml in the current directory is
    used if it exists; otherwise the built-in defaults apply.

    Args:
        config_path: Path to configuration file

    Returns:
        Loaded configuration object

    Raises:
        ConfigError: If config file is invalid or cannot be loaded
    """
    if config_path is None:
        default_path = Path.cwd() / DEFAULT_CONFIG_FILE
        return ToolConfig(default_path if default_path.exists() else None)
    return ToolConfig(config_path)


def generate_config_template() -> str:
    """Generate a configuration file template with all parameters documented.

    Returns:
        YAML configuration template as a string with inline documentation
    """
    template = """# strict-semver configuration
#
# Every setting is optional. Place this file in the working directory as
# strict-semver.yaml or pass it explicitly with --config.

# Version prefix (e.g., "v" for v1.2.3, "" for 1.2.3)
# Stripped from versions given on the command line and added to output
# Type: string
# Default: "" (no prefix)
version-prefix: ""

# Settings for the sort command
sort:
  # Delimiter separating versions on standard input
  # Type: string or null
  # Default: null (any run of whitespace)
  delimiter: null

  # Separator written between sorted versions
  # Type: string
  # Default: newline
  output-separator: "\\n"

# Settings for the bump command
bump:
  # Bump applied when no --major/--minor/--patch/--release/--prerelease is given
  # Type: one of major, minor, patch, release, prerelease
  # Default: patch
  default: patch
"""
    return template
