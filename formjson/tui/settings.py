"""Project settings loader.

Reads formjson configuration from .formjson.yaml in the project root, so a
team can pin the default form variant, JSON indentation and clipboard
backend per project.

Example .formjson.yaml:
    formjson:
      variant: lottery          # basic | lottery
      json_indent: 2
      copy_status_seconds: 2.0
      clipboard: system         # system | memory
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from formjson.lib.clipboard import CLIPBOARD_KINDS
from formjson.lib.errors import ConfigurationError
from formjson.lib.variants import DEFAULT_VARIANT, VARIANTS
from formjson.tui.constants import COPY_STATUS_SECONDS, JSON_INDENT

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = ".formjson.yaml"


@dataclass
class FormSettings:
    """formjson configuration settings."""

    # Form variant opened by default
    variant: str = DEFAULT_VARIANT

    # Indentation of the generated JSON
    json_indent: int = JSON_INDENT

    # How long the copy status message stays visible
    copy_status_seconds: float = COPY_STATUS_SECONDS

    # Clipboard backend: "system" or "memory"
    clipboard: str = "system"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Check setting values.

        Raises:
            ConfigurationError: If any value is out of range
        """
        if not isinstance(self.variant, str) or self.variant not in VARIANTS:
            raise ConfigurationError(
                f"Unknown form variant '{self.variant}'",
                setting="variant",
                value=self.variant,
                suggestion=f"Use one of: {', '.join(VARIANTS)}",
            )
        if not isinstance(self.clipboard, str) or self.clipboard not in CLIPBOARD_KINDS:
            raise ConfigurationError(
                f"Unknown clipboard kind '{self.clipboard}'",
                setting="clipboard",
                value=self.clipboard,
                suggestion=f"Use one of: {', '.join(CLIPBOARD_KINDS)}",
            )
        # bool is an int subclass; reject it explicitly
        indent_ok = (
            isinstance(self.json_indent, int)
            and not isinstance(self.json_indent, bool)
            and self.json_indent >= 0
        )
        if not indent_ok:
            raise ConfigurationError(
                "json_indent must be a non-negative integer",
                setting="json_indent",
                value=self.json_indent,
            )
        seconds_ok = (
            isinstance(self.copy_status_seconds, (int, float))
            and not isinstance(self.copy_status_seconds, bool)
            and self.copy_status_seconds > 0
        )
        if not seconds_ok:
            raise ConfigurationError(
                "copy_status_seconds must be a positive number",
                setting="copy_status_seconds",
                value=self.copy_status_seconds,
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormSettings":
        """Build settings from the ``formjson`` section of the settings file."""
        defaults = cls()
        return cls(
            variant=data.get("variant", defaults.variant),
            json_indent=data.get("json_indent", defaults.json_indent),
            copy_status_seconds=data.get("copy_status_seconds", defaults.copy_status_seconds),
            clipboard=data.get("clipboard", defaults.clipboard),
        )

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> "FormSettings":
        """Load settings from .formjson.yaml in the project root.

        Args:
            project_root: Project root directory. Defaults to cwd.

        Returns:
            FormSettings with values from the file, or defaults when the
            file is missing or cannot be parsed.

        Raises:
            ConfigurationError: If the file parses but holds invalid values
        """
        root = project_root or Path.cwd()
        config_path = root / SETTINGS_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", config_path, e)
            return cls()

        if not isinstance(config, dict):
            logger.warning("Ignoring settings file %s: expected a mapping", config_path)
            return cls()

        section = config.get("formjson") or {}
        if not isinstance(section, dict):
            raise ConfigurationError(
                "The 'formjson' section must be a mapping",
                setting="formjson",
                value=section,
            )
        logger.debug("Loaded settings from %s", config_path)
        return cls.from_dict(section)


# Global settings instance (loaded on first access)
_settings: FormSettings | None = None


def get_settings(reload: bool = False) -> FormSettings:
    """Get the global formjson settings.

    Args:
        reload: Force reload from the settings file.
    """
    global _settings
    if _settings is None or reload:
        _settings = FormSettings.load()
    return _settings
