# templink/config/__init__.py
"""
Engine configuration: the settings dataclass and the TOML loader.
"""
from .settings import EngineConfig, normalize_base_dir
from .loader import load_and_merge_configs, build_engine_config

__all__ = [
    "EngineConfig",
    "normalize_base_dir",
    "load_and_merge_configs",
    "build_engine_config",
]
