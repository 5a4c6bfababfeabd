"""Pager defaults with directory-based detection.

Applications that paginate in several places usually want one page size.
This module resolves it (and the preferred output format) from a
``.pagewise/`` folder next to the project, the user's config directory, or
the environment.

## .pagewise/ Folder Specification

```
.pagewise/
└── config.json          # Main config file
```

### config.json Structure

```json
{
  "entries_per_page": 25,
  "output": {
    "format": "json",
    "full": true
  }
}
```

### Resolution Order

1. Check for .pagewise/config.json in current directory
2. Walk up parent directories looking for .pagewise/config.json
3. Fall back to the user config file (``user_config_dir("pagewise")``)
4. ``PAGEWISE_ENTRIES_PER_PAGE`` / ``PAGEWISE_FORMAT`` override any file value
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir

from .errors import InvalidConfiguration

logger = logging.getLogger(__name__)

# User-level config location
USER_CONFIG_DIR = Path(user_config_dir("pagewise"))
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.json"

# Directory-level config
PAGER_CONFIG_DIR = ".pagewise"
PAGER_CONFIG_FILE = "config.json"

ENV_ENTRIES_PER_PAGE = "PAGEWISE_ENTRIES_PER_PAGE"
ENV_FORMAT = "PAGEWISE_FORMAT"

DEFAULT_ENTRIES_PER_PAGE = 10
OUTPUT_FORMATS = ("toon", "json", "text")


@dataclass
class PagerSettings:
    """Resolved pager defaults for a directory."""

    entries_per_page: int = DEFAULT_ENTRIES_PER_PAGE
    output_format: str = "toon"
    full: bool = False  # Emit the full view by default

    # Source of config
    config_path: Optional[Path] = None
    config_source: str = "none"  # "directory", "parent", "user", "env", "none"

    def to_dict(self) -> dict:
        """Convert to dict for output."""
        return {
            "entries_per_page": self.entries_per_page,
            "output_format": self.output_format,
            "full": self.full,
            "config_path": str(self.config_path) if self.config_path else None,
            "config_source": self.config_source,
        }


def _validate_entries_per_page(value: Any, origin: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidConfiguration(
            f"entries_per_page from {origin} must be an integer, got {value!r}",
            field="entries_per_page",
            value=value,
        ) from None
    if number < 1:
        raise InvalidConfiguration(
            f"entries_per_page from {origin} must be at least 1, got {number}",
            field="entries_per_page",
            value=value,
        )
    return number


def _validate_format(value: Any, origin: str) -> str:
    output_format = str(value).lower()
    if output_format not in OUTPUT_FORMATS:
        raise InvalidConfiguration(
            f"output format from {origin} must be one of {', '.join(OUTPUT_FORMATS)}, got {value!r}",
            field="output_format",
            value=value,
        )
    return output_format


def find_pager_config(start_path: Optional[Path] = None) -> Optional[Path]:
    """Find the nearest .pagewise/config.json by walking up the directory tree.

    Args:
        start_path: Directory to start searching from (default: cwd)

    Returns:
        Path to config.json if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    current = Path(start_path).resolve()

    while current != current.parent:
        config_path = current / PAGER_CONFIG_DIR / PAGER_CONFIG_FILE
        if config_path.exists():
            return config_path
        current = current.parent

    # Check root
    config_path = current / PAGER_CONFIG_DIR / PAGER_CONFIG_FILE
    if config_path.exists():
        return config_path

    return None


def _read_json(config_path: Path) -> Any:
    with open(config_path) as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfiguration(f"{config_path} is not valid JSON: {e}") from None


def load_pager_config(config_path: Path) -> Any:
    """Load and parse a .pagewise/config.json file."""
    return _read_json(config_path) or {}


def load_user_config() -> Any:
    """Load the user-level config file, if there is one."""
    if USER_CONFIG_FILE.exists():
        return _read_json(USER_CONFIG_FILE) or {}
    return None


def _apply(settings: PagerSettings, data: Any, origin: str) -> None:
    if not isinstance(data, dict):
        raise InvalidConfiguration(
            f"config from {origin} must be a JSON object, got {type(data).__name__}"
        )
    if "entries_per_page" in data:
        settings.entries_per_page = _validate_entries_per_page(data["entries_per_page"], origin)

    output_config = data.get("output", {})
    if not isinstance(output_config, dict):
        raise InvalidConfiguration(
            f"'output' from {origin} must be a JSON object, got {type(output_config).__name__}",
            field="output",
            value=output_config,
        )
    if "format" in output_config:
        settings.output_format = _validate_format(output_config["format"], origin)
    if "full" in output_config:
        settings.full = bool(output_config["full"])


def resolve_settings(path: Optional[Path] = None) -> PagerSettings:
    """Resolve pager settings for a path.

    Resolution order:
    1. .pagewise/config.json in the path or its parents
    2. The user config file
    3. Environment variables (override file values)

    Args:
        path: Directory to resolve settings for (default: cwd)

    Returns:
        PagerSettings with resolved configuration

    Raises:
        InvalidConfiguration: If any layer holds an unusable value
    """
    settings = PagerSettings()

    # Step 1: Look for .pagewise/config.json
    config_path = find_pager_config(path)

    if config_path:
        settings.config_path = config_path

        # Determine if it's in the target directory or a parent
        target_dir = Path(path).resolve() if path else Path.cwd().resolve()
        config_dir = config_path.parent.parent  # .pagewise/config.json -> .pagewise -> parent

        if config_dir == target_dir:
            settings.config_source = "directory"
        else:
            settings.config_source = "parent"

        _apply(settings, load_pager_config(config_path), str(config_path))
    else:
        # Step 2: Fall back to user config
        user_config = load_user_config()
        if user_config is not None:
            settings.config_path = USER_CONFIG_FILE
            settings.config_source = "user"
            _apply(settings, user_config, str(USER_CONFIG_FILE))

    # Step 3: Environment overrides
    env_per_page = os.environ.get(ENV_ENTRIES_PER_PAGE)
    if env_per_page:
        settings.entries_per_page = _validate_entries_per_page(env_per_page, ENV_ENTRIES_PER_PAGE)
    env_format = os.environ.get(ENV_FORMAT)
    if env_format:
        settings.output_format = _validate_format(env_format, ENV_FORMAT)
    if (env_per_page or env_format) and settings.config_source == "none":
        settings.config_source = "env"

    logger.debug(
        "Resolved pager settings from %s: %d per page, %s output",
        settings.config_source,
        settings.entries_per_page,
        settings.output_format,
    )
    return settings


def create_pager_config(
    path: Path,
    entries_per_page: Optional[int] = None,
    output_format: Optional[str] = None,
    full: Optional[bool] = None,
) -> Path:
    """Create a .pagewise/config.json file in the specified directory.

    Args:
        path: Directory to create .pagewise/ in
        entries_per_page: Default page size
        output_format: Default output format (toon, json, text)
        full: Whether the full view is emitted by default

    Returns:
        Path to created config file
    """
    config: dict = {}

    if entries_per_page is not None:
        config["entries_per_page"] = _validate_entries_per_page(entries_per_page, "arguments")
    if output_format is not None:
        config.setdefault("output", {})["format"] = _validate_format(output_format, "arguments")
    if full is not None:
        config.setdefault("output", {})["full"] = full

    pager_dir = Path(path) / PAGER_CONFIG_DIR
    pager_dir.mkdir(exist_ok=True)

    config_path = pager_dir / PAGER_CONFIG_FILE
    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)

    return config_path


def get_settings_help_message(settings: PagerSettings) -> str:
    """Generate a helpful message about the resolved settings."""
    if settings.config_source == "none":
        return f"""No pager configuration found; using {settings.entries_per_page} entries per page.

To configure this directory, create .pagewise/config.json:

```json
{{
  "entries_per_page": 25,
  "output": {{"format": "json"}}
}}
```

Or run: pagewise init
"""

    lines = [f"Pager settings (from {settings.config_source}):"]
    if settings.config_path:
        lines.append(f"  Config: {settings.config_path}")
    lines.append(f"  Entries per page: {settings.entries_per_page}")
    lines.append(f"  Output format: {settings.output_format}")
    lines.append(f"  Full view: {'yes' if settings.full else 'no'}")
    return "\n".join(lines)
