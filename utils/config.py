# utils/config.py
import tomllib
from pathlib import Path
from typing import Any, Dict as PyDict

import structlog
import yaml

log = structlog.get_logger()


def load_toml_config(config_path: Path, config_name: str) -> PyDict[str, Any]:
    """Loads a TOML configuration file. Missing or broken files yield ``{}``."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        return {}
    try:
        with config_path.open("rb") as f:  # tomllib requires bytes mode
            config_data = tomllib.load(f)
        log.info(f"{config_name} config loaded", path=str(config_path))
        return config_data
    except tomllib.TOMLDecodeError as e:
        log.error(
            f"Error parsing TOML for {config_name}",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        return {}


def load_yaml_config(config_path: Path, config_name: str) -> PyDict[str, Any]:
    """Loads a YAML configuration file. Missing files and parse errors raise."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        log.error(f"{config_name} config must be a mapping", path=str(config_path))
        raise TypeError(f"{config_name} configuration must be a mapping")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data
