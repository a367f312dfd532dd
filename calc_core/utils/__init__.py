# Calc Core - Utils Module
from .paths import (
    get_global_config_dir,
    get_global_config_path,
    get_local_config_path,
)

__all__ = [
    'get_global_config_dir',
    'get_global_config_path',
    'get_local_config_path',
]
