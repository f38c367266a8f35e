"""
CryptoPrims - Configuration
Defaults and validation for the benchmark runner and the shared logger.
The primitives themselves take no configuration.
"""

import copy
import logging
import os

LOG_LEVEL_ENV_VAR = "CRYPTOPRIMS_LOG_LEVEL"

# shaped like a benchmark session config; callers pass a dict, nothing is read from disk
DEFAULT_CONFIG = {
    "test_parameters": {
        "iterations": 3,
        "data_size_bytes": 16 * 1024,
        "seed": 0,
        "implementations": ["twofish128", "twofish192", "twofish256", "sha256"],
        "check_correctness": True,
    },
    "logging": {
        "level": "INFO",
    },
}

_VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(default="INFO"):
    # the environment wins over the default so test runs can turn on DEBUG
    level = os.environ.get(LOG_LEVEL_ENV_VAR, default).upper()
    if level not in _VALID_LEVELS:
        return logging.INFO
    return getattr(logging, level)


def _merge(base, overrides):
    # recursive dict merge, overrides win
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config=None):
    """
    Build a validated configuration from the defaults and optional overrides.

    Args:
        config: Dict of overrides, merged recursively into DEFAULT_CONFIG

    Returns:
        dict: The merged configuration

    Raises:
        ValueError: If a parameter is out of range
    """
    merged = _merge(copy.deepcopy(DEFAULT_CONFIG), config or {})
    params = merged["test_parameters"]

    if int(params["iterations"]) < 1:
        raise ValueError(f"iterations must be at least 1, got {params['iterations']}")
    if int(params["data_size_bytes"]) < 0:
        raise ValueError(f"data_size_bytes must not be negative, got {params['data_size_bytes']}")
    if isinstance(params["implementations"], str):
        params["implementations"] = [params["implementations"]]

    level = str(merged["logging"]["level"]).upper()
    if level not in _VALID_LEVELS:
        raise ValueError(f"Unknown log level: {merged['logging']['level']}")
    merged["logging"]["level"] = level

    logging.getLogger("CryptoPrims").setLevel(resolve_log_level(level))
    return merged
