"""
Config Manager

Loads the engine configuration from YAML (with include: support), validates
it into EngineSettings and installs it process-wide.
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from models.settings import EngineSettings, set_settings
from utils.logger import get_logger, configure_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Engine configuration manager with include system support

    Loads transitions.yaml and processes the include: directive to merge
    modular YAML files. Falls back to factory_defaults.yaml when the main
    configuration cannot be loaded or validated.

    Example:
        config = ConfigManager()
        config.load()
        config.apply()   # installs settings + reconfigures the logger

        config.settings.tick_interval_ms
    """

    def __init__(
        self,
        config_path: Union[str, Path] = "config/transitions.yaml",
        defaults_path: Union[str, Path] = "config/factory_defaults.yaml",
        base_dir: Optional[Path] = None
    ):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main transitions.yaml (relative to base_dir)
            defaults_path: Path to factory defaults fallback (relative to base_dir)
            base_dir: Directory relative paths are resolved against (default: src/)
        """
        self.base_dir = Path(base_dir) if base_dir else SRC_DIR
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict = {}
        self.settings = EngineSettings()
        self.used_defaults = False

    def load(self) -> Dict:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main transitions.yaml
        2. If it has an 'include:' list, load and merge those files
        3. Validate the 'engine:' section
        4. Fallback to factory defaults on any failure

        Returns:
            Merged config data dict
        """
        full_path = self.base_dir / self.config_path

        try:
            main_config = self._read_yaml(full_path)

            if 'include' in main_config:
                log.info("Using include-based configuration")
                includes = main_config.pop('include')
                self.data = self._load_with_includes(includes, full_path.parent)
                self.data.update(main_config)
            else:
                self.data = main_config

            self.settings = EngineSettings(**(self.data.get('engine') or {}))
            self.used_defaults = False

        except (OSError, yaml.YAMLError, ValidationError, TypeError) as ex:
            log.error("Failed to load transitions config", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            defaults_path = self.base_dir / self.factory_defaults_path
            self.data = self._read_yaml(defaults_path)
            self.settings = EngineSettings(**(self.data.get('engine') or {}))
            self.used_defaults = True

        log.info(
            "Configuration loaded",
            tick_interval_ms=self.settings.tick_interval_ms,
            log_level=self.settings.log_level.name
        )
        return self.data

    def apply(self) -> EngineSettings:
        """Install settings process-wide and reconfigure the logger"""
        set_settings(self.settings)
        configure_logger(min_level=self.settings.log_level, use_colors=self.settings.use_colors)
        log.info(
            "Engine settings applied",
            category=LogCategory.SYSTEM,
            tick_interval_ms=self.settings.tick_interval_ms,
            log_level=self.settings.log_level.name
        )
        return self.settings

    def _read_yaml(self, path: Path) -> Dict:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise TypeError(f"{path.name} must contain a mapping, got {type(data).__name__}")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["engine.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict (later files override earlier keys)
        """
        merged = {}

        for filename in include_list:
            file_data = self._read_yaml(config_dir / filename)
            if file_data:
                merged.update(file_data)
                log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        return merged
