"""
Configuration Management
========================

Configuration utilities for the structured comment engine.
"""

from scomment_core.config.settings import (
    EngineConfig,
    ConverterConfig,
    LinkConfig,
    DEFAULT_RESERVED_ENTITIES,
    load_config,
    save_config,
    get_default_config,
)

__all__ = [
    "EngineConfig",
    "ConverterConfig",
    "LinkConfig",
    "DEFAULT_RESERVED_ENTITIES",
    "load_config",
    "save_config",
    "get_default_config",
]
