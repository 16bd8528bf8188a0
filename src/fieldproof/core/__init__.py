"""Core infrastructure for fieldproof: configuration, logging, exceptions."""

from .config import CoreSettings, clear_config_cache, get_config
from .exceptions import ConfigException, FieldproofException, ValidationException

__all__ = [
    "ConfigException",
    "CoreSettings",
    "FieldproofException",
    "ValidationException",
    "clear_config_cache",
    "get_config",
]
