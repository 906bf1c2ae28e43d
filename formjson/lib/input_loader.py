"""Load form values for the non-interactive ``convert`` command.

Values come from a YAML (or JSON) mapping file and/or ``FIELD=VALUE``
assignments on the command line. YAML turns ``30`` into an int, ``true``
into a bool and ``2024-01-01`` into a date; the engine works on raw
strings, so every scalar is coerced back to the text a user would have
typed.

Example values.yaml:
    name: 山田太郎
    age: 30
    bool: true
    date: 2024-01-01
    date2: 2024-01-02
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import yaml

from formjson.lib.errors import ConfigurationError
from formjson.lib.variants import FormVariant

logger = logging.getLogger(__name__)

__all__ = [
    "coerce_value",
    "load_snapshot",
    "parse_assignments",
    "build_snapshot",
]


def coerce_value(value: Any) -> str:
    """Turn a YAML scalar back into the string form the engine expects."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return str(value)


def load_snapshot(path: Union[str, Path]) -> Dict[str, str]:
    """Read a mapping of field values from a YAML or JSON file.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not UTF-8,
            unparsable or not a mapping
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Input file not found: {path}", value=str(path)) from None
    except OSError as e:
        raise ConfigurationError(
            f"Could not read input file: {path}",
            details={"cause": str(e)},
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Could not parse input file: {path}",
            details={"cause": str(e)},
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(
            f"Input file is not UTF-8 text: {path}",
            details={"cause": str(e)},
            suggestion="Save the file with UTF-8 encoding",
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Input file must contain a mapping of field values: {path}",
            details={"found": type(data).__name__},
        )

    logger.debug("Loaded %d values from %s", len(data), path)
    return {str(key): coerce_value(value) for key, value in data.items()}


def parse_assignments(assignments: Iterable[str]) -> Dict[str, str]:
    """Parse ``FIELD=VALUE`` strings; the value may be empty or contain '='."""
    values: Dict[str, str] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise ConfigurationError(
                f"Invalid assignment '{item}'",
                suggestion="Use --set FIELD=VALUE, e.g. --set age=30",
            )
        values[name.strip()] = value
    return values


def build_snapshot(
    variant: FormVariant,
    input_path: Optional[Union[str, Path]] = None,
    assignments: Iterable[str] = (),
) -> Dict[str, str]:
    """Combine file values and assignments (assignments win) into a snapshot.

    Raises:
        UnknownFieldError: If a value names a field the variant lacks
    """
    values: Dict[str, str] = variant.initial_values()
    supplied: Dict[str, str] = {}
    if input_path is not None:
        supplied.update(load_snapshot(input_path))
    supplied.update(parse_assignments(assignments))

    for name, value in supplied.items():
        values[variant.rule(name).name] = value
    return values
