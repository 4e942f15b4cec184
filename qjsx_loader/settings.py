"""Resolver configuration.

Settings are plain values injected into the resolvers. They can be loaded
from the ``resolution`` section of a settings.yaml file:

```yaml
resolution:
  env_var: QJSXPATH
  extension: .js
  index_file: index.js
  path_separator: ":"
  dir_separator: /
```
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ENV_VAR = "QJSXPATH"
DEFAULT_EXTENSION = ".js"
DEFAULT_INDEX_FILE = "index.js"

# Separators a search-path entry may end with, regardless of platform.
TRAILING_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class ResolverSettings:
    """Settings shared by the search-path and local resolvers.

    Attributes:
        env_var: Environment variable holding the module search path
        extension: Source-file extension appended to extensionless specifiers
        index_file: Entry file looked up when a specifier names a directory
        path_separator: Separator between search-path entries
        dir_separator: Separator used when building candidate paths
    """

    env_var: str = DEFAULT_ENV_VAR
    extension: str = DEFAULT_EXTENSION
    index_file: str = DEFAULT_INDEX_FILE
    path_separator: str = os.pathsep
    dir_separator: str = os.sep

    @classmethod
    def from_settings(cls, settings: dict[str, Any] | None) -> ResolverSettings:
        """Build settings from a settings dictionary.

        Args:
            settings: Parsed settings.yaml content (may be None or empty)

        Returns:
            ResolverSettings with defaults for anything not given

        Raises:
            ValueError: If the resolution section or a value has the wrong type
        """
        section = (settings or {}).get("resolution") or {}
        if not isinstance(section, dict):
            raise ValueError(f"'resolution' settings must be a mapping, got {type(section).__name__}")

        known = {f.name for f in fields(cls)}
        values: dict[str, str] = {}
        for key, value in section.items():
            if key not in known:
                logger.warning(f"Ignoring unknown resolution setting '{key}'")
                continue
            if not isinstance(value, str) or not value:
                raise ValueError(f"Resolution setting '{key}' must be a non-empty string")
            values[key] = value

        return cls(**values)


def load_settings(config_path: Path | None) -> ResolverSettings:
    """Load resolver settings from a YAML file.

    A missing path (or None) yields the defaults.

    Raises:
        ValueError: If the file is not valid YAML or has invalid values
    """
    if config_path is None or not config_path.exists():
        return ResolverSettings()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid settings file {config_path}: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Settings file {config_path} must contain a mapping")

    logger.debug(f"Loaded resolver settings from {config_path}")
    return ResolverSettings.from_settings(data)
