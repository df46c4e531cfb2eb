# templink/config/loader.py
"""
Handles loading and merging of engine configuration from TOML files.
"""
import toml
from pathlib import Path
from typing import Dict, Any, Optional
import structlog

from templink.exceptions import ConfigError

from .settings import EngineConfig, DEFAULT_ENCODING

log = structlog.get_logger(__name__)

PROJECT_CONFIG_FILENAMES = [".templink.toml", "templink.toml", "pyproject.toml"]
USER_CONFIG_DIR = Path.home() / ".config" / "templink"
USER_CONFIG_FILE = USER_CONFIG_DIR / "config.toml"

CONFIG_KEY_TO_ENGINECONFIG_ATTR_MAP: Dict[str, str] = {
    "base_dir": "base_dir",
    "cache": "cache_enabled",
    "encoding": "encoding",
}
NON_ENGINE_KEYS = {"vars"}

def _load_toml_file_data(file_path: Path) -> Dict[str, Any]:
    if not file_path.is_file(): return {}
    log.debug("loading_toml_config_file", path=str(file_path))
    try:
        data = toml.load(file_path)
    except (toml.TomlDecodeError, OSError) as e:
        log.error("config_file_load_error", path=str(file_path), error=str(e))
        raise ConfigError(f"Could not read config file {file_path}: {e}") from e
    return data.get("tool", {}).get("templink", {}) if file_path.name == "pyproject.toml" else data

def load_and_merge_configs(project_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Merges the user-global config with the first project config found in
    `project_dir` (default: cwd). Project values win; `vars` tables are merged key by key.
    """
    search_dir = project_dir or Path.cwd()
    merged_toml_data: Dict[str, Any] = {}
    if USER_CONFIG_FILE.is_file():
        log.info("loading_user_global_config", path=str(USER_CONFIG_FILE))
        merged_toml_data.update(_load_toml_file_data(USER_CONFIG_FILE))

    for filename in PROJECT_CONFIG_FILENAMES:
        candidate = search_dir / filename
        if candidate.is_file():
            project_settings = _load_toml_file_data(candidate)
            if not project_settings:
                continue
            log.info("loading_project_local_config", path=str(candidate))
            user_vars = merged_toml_data.get("vars", {})
            project_vars = project_settings.pop("vars", {})
            if isinstance(user_vars, dict) and isinstance(project_vars, dict):
                merged_toml_data["vars"] = {**user_vars, **project_vars}
            merged_toml_data.update(project_settings)
            break
    if not merged_toml_data: log.debug("no_configuration_files_loaded")
    return merged_toml_data

def build_engine_config(raw: Dict[str, Any]) -> EngineConfig:
    """Turns a merged TOML mapping into an EngineConfig, validating value types."""
    options: Dict[str, Any] = {}
    for toml_key, value in raw.items():
        attr = CONFIG_KEY_TO_ENGINECONFIG_ATTR_MAP.get(toml_key)
        if attr is None:
            if toml_key not in NON_ENGINE_KEYS:
                log.warning("unknown_config_key_ignored", key=toml_key)
            continue
        options[attr] = value

    if not isinstance(options.get("base_dir", ""), str):
        raise ConfigError(f"'base_dir' must be a string, got {type(options['base_dir']).__name__}")
    if not isinstance(options.get("cache_enabled", False), bool):
        raise ConfigError(f"'cache' must be a boolean, got {type(options['cache_enabled']).__name__}")
    if not isinstance(options.get("encoding", DEFAULT_ENCODING), str):
        raise ConfigError(f"'encoding' must be a string, got {type(options['encoding']).__name__}")
    return EngineConfig(**options)
