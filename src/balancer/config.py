# src/balancer/config.py
import logging
from typing import Dict, Iterable, Tuple

from pydantic import ValidationError

from .models import SimulationConfig
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

# Fields checked together by SimulationConfig's model validator
_PROCESS_TIME_FIELDS = ("min_process_time", "max_process_time")


def _field_names() -> Dict[str, str]:
    """Map both snake_case names and camelCase aliases to field names."""
    names = {}
    for name, field in SimulationConfig.model_fields.items():
        names[name] = name
        if field.alias:
            names[field.alias] = name
    return names


def parse_config_lines(lines: Iterable[str]) -> Iterable[Tuple[str, str]]:
    """Yield (key, value) pairs from flat key=value text."""
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        yield key.strip(), value.strip()


def build_config(pairs: Iterable[Tuple[str, str]]) -> SimulationConfig:
    """
    Build a config from raw key/value pairs.

    Unknown keys are ignored. A value that fails validation is dropped so the
    default for that field survives; the rest of the file still applies.
    """
    names = _field_names()
    values: Dict[str, str] = {}
    for key, value in pairs:
        name = names.get(key)
        if name is None:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue
        values[name] = value

    while True:
        try:
            return SimulationConfig.model_validate(values)
        except ValidationError as e:
            bad_fields = set()
            for error in e.errors():
                if error["loc"]:
                    bad_fields.add(names.get(str(error["loc"][0]), str(error["loc"][0])))
                else:
                    bad_fields.update(f for f in _PROCESS_TIME_FIELDS if f in values)

            bad_fields &= set(values)
            if not bad_fields:
                logger.warning(f"Invalid configuration, using defaults: {str(e)}")
                return SimulationConfig()

            for name in sorted(bad_fields):
                logger.warning(
                    f"Invalid value for config key '{name}': {values[name]!r}, using default"
                )
                del values[name]


def load_config(filename: str) -> SimulationConfig:
    """
    Load simulation parameters from a key=value text file.

    Raises:
        ConfigError: If the file cannot be opened
    """
    try:
        with open(filename, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as e:
        raise ConfigError(f"Failed to open config file: {filename}") from e

    config = build_config(parse_config_lines(lines))
    logger.info(f"Loaded configuration from {filename}")
    return config


def load_config_or_default(filename: str) -> SimulationConfig:
    try:
        return load_config(filename)
    except ConfigError as e:
        logger.warning(f"{str(e)}. Using default config.")
        return SimulationConfig()
