"""
Configuration Manager for loading the calculator's YAML config.
"""
import copy
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from .utils.paths import get_global_config_path, get_local_config_path


DEFAULT_CONFIG = {
    "arithmetic": {
        "strict_division": False
    },
    "output": {
        "mode": "rich"
    },
    "repl": {
        "prompt": "calc ❯ "
    }
}

VALID_OUTPUT_MODES = ("rich", "plain", "quiet")


class ConfigError(Exception):
    """Raised when a config file cannot be read or is malformed."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class ConfigManager:
    """
    Loads configuration by proximity: an explicit path first,
    then intcalc.yaml in the working directory, then ~/.intcalc/config.yaml.
    File values take priority; defaults fill missing keys.
    """

    def __init__(self, global_dir: Optional[str] = None, cwd: Optional[str] = None):
        """
        Initialize the ConfigManager.

        Args:
            global_dir: Optional custom global directory (for testing)
            cwd: Optional working directory to search (for testing)
        """
        self.global_dir = global_dir
        self.cwd = cwd
        self._config: Dict[str, Any] = {}
        self._config_path: Optional[Path] = None

    def candidate_paths(self, config_path: Optional[str] = None) -> List[Path]:
        """Config files to try, nearest first."""
        paths = []
        if config_path:
            paths.append(Path(config_path))
        paths.append(get_local_config_path(self.cwd))
        paths.append(get_global_config_path(self.global_dir))
        return paths

    def load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from the nearest config file.

        Args:
            config_path: Optional explicit path; must exist if given

        Returns:
            Configuration dictionary merged over DEFAULT_CONFIG

        Raises:
            ConfigError: If the explicit path is missing or a file is malformed
        """
        if config_path and not Path(config_path).exists():
            raise ConfigError(f"Config file not found: {config_path}", Path(config_path))

        for path in self.candidate_paths(config_path):
            if path.is_file():
                self._config = self._merge_with_defaults(self._read(path))
                self._config_path = path
                break
        else:
            self._config = copy.deepcopy(DEFAULT_CONFIG)
            self._config_path = None

        self._validate()
        return self._config

    def _read(self, path: Path) -> Dict[str, Any]:
        """Read one YAML file into a dict."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", path) from e
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e}", path) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping: {path}", path)
        return data

    def _merge_with_defaults(self, file_config: Dict) -> Dict:
        merged = copy.deepcopy(DEFAULT_CONFIG)
        self._deep_merge_priority(merged, file_config)
        return merged

    def _deep_merge_priority(self, base: Dict, override: Dict):
        """
        Deep merge override into base. Override values take priority.

        Args:
            base: Base dictionary (modified in place)
            override: Override dictionary (values take priority)
        """
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge_priority(base[key], value)
            else:
                base[key] = value

    def _validate(self):
        mode = self.get("output.mode")
        if mode not in VALID_OUTPUT_MODES:
            raise ConfigError(
                f"output.mode must be one of {', '.join(VALID_OUTPUT_MODES)}, got {mode!r}",
                self._config_path,
            )
        if not isinstance(self.get("arithmetic.strict_division"), bool):
            raise ConfigError("arithmetic.strict_division must be true or false", self._config_path)
        if not isinstance(self.get("repl"), dict):
            raise ConfigError("repl must be a mapping", self._config_path)
        if not isinstance(self.get("repl.prompt"), str):
            raise ConfigError("repl.prompt must be a string", self._config_path)

    def get_config(self) -> Dict[str, Any]:
        """Get the current configuration."""
        if not self._config:
            self.load_config()
        return self._config

    def get_config_path(self) -> Optional[Path]:
        """Path the config was loaded from, or None for built-in defaults."""
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., "output.mode")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self.get_config()
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any):
        """
        Set a configuration value in memory.

        Args:
            key: Dot-separated key path
            value: Value to set
        """
        keys = key.split(".")
        config = self.get_config()
        for k in keys[:-1]:
            config = config.setdefault(k, {})
        config[keys[-1]] = value
