"""
Settings Loader - YAML settings with Pydantic validation.

Settings files live in crossing/settings/. They are read once at startup;
nothing reloads them while a game runs.

Examples:
    >>> loader = SettingsLoader()
    >>> settings = loader.load("default")
    >>> settings.rules.life_limit
    3
    >>> loader.list_available()
    ['default']
"""

from pathlib import Path
from typing import List, Optional, Union

import yaml
from pydantic import ValidationError

from crossing.logging import get_logger
from crossing.models import GameSettings

log = get_logger('settings')

SETTINGS_DIR = Path(__file__).parent / 'settings'


class SettingsLoader:
    """Loads and validates game settings from YAML files.

    Attributes:
        settings_dir: Directory containing <name>.yaml settings files
    """

    def __init__(self, settings_dir: Optional[Path] = None):
        self.settings_dir = Path(settings_dir) if settings_dir is not None else SETTINGS_DIR

    def load(self, name: str) -> GameSettings:
        """Load settings by name (file stem in settings_dir).

        Raises:
            FileNotFoundError: If the settings file doesn't exist
            ValueError: If the YAML content is invalid
            yaml.YAMLError: If the YAML syntax is malformed
        """
        yaml_path = self.settings_dir / f"{name}.yaml"

        if not yaml_path.exists():
            raise FileNotFoundError(
                f"Settings '{name}' not found. "
                f"Expected file: {yaml_path}"
            )

        return self.load_file(yaml_path)

    def load_file(self, yaml_path: Union[str, Path]) -> GameSettings:
        """Load and validate a settings file from any path."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Settings file not found: {yaml_path}")

        try:
            with open(yaml_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(
                f"Failed to parse YAML file '{yaml_path}': {e}"
            )

        # An empty file means "all defaults"
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ValueError(
                f"Invalid settings in '{yaml_path}': expected a mapping at the top level"
            )

        try:
            settings = GameSettings(**config_dict)
        except ValidationError as e:
            raise ValueError(
                f"Invalid settings in '{yaml_path}':\n{e}"
            ) from e

        log.info("Loaded settings '%s' from %s", settings.name, yaml_path)
        return settings

    def list_available(self) -> List[str]:
        """Names of all settings files, sorted."""
        if not self.settings_dir.exists():
            return []
        return sorted(f.stem for f in self.settings_dir.glob("*.yaml"))

    def exists(self, name: str) -> bool:
        return (self.settings_dir / f"{name}.yaml").exists()


def load_settings(source: Optional[str] = None) -> GameSettings:
    """Resolve a --settings argument.

    None loads 'default'; a value ending in .yaml/.yml is a file path;
    anything else is a settings name.
    """
    loader = SettingsLoader()
    if source is None:
        return loader.load('default')
    if source.endswith(('.yaml', '.yml')):
        return loader.load_file(source)
    return loader.load(source)
