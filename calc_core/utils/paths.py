"""
Path utilities for configuration file locations.
"""
from pathlib import Path
from typing import Optional


# Global configuration directory (user-level)
DEFAULT_GLOBAL_DIR_NAME = ".intcalc"

# Config file looked up in the working directory
LOCAL_CONFIG_NAME = "intcalc.yaml"


def get_home_dir() -> Path:
    """Get the user's home directory."""
    return Path.home()


def get_global_config_dir(custom_dir: Optional[str] = None) -> Path:
    """
    Get the global configuration directory.

    Args:
        custom_dir: Optional custom directory (for testing)

    Returns:
        Path to global config directory (~/.intcalc)
    """
    if custom_dir:
        return Path(custom_dir)
    return get_home_dir() / DEFAULT_GLOBAL_DIR_NAME


def get_global_config_path(custom_dir: Optional[str] = None) -> Path:
    """Get the path to the global config.yaml file."""
    return get_global_config_dir(custom_dir) / "config.yaml"


def get_local_config_path(cwd: Optional[str] = None) -> Path:
    """
    Get the path to the working-directory config file.

    Args:
        cwd: Directory to look in (defaults to the current directory)

    Returns:
        Path to intcalc.yaml
    """
    base = Path(cwd) if cwd else Path.cwd()
    return base / LOCAL_CONFIG_NAME
