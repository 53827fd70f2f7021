"""
Configuration Settings
======================

Configuration dataclasses for the structured comment engine.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, List
import json
import logging

import yaml

logger = logging.getLogger(__name__)

DEFAULT_RESERVED_ENTITIES = ['#', 'amp;', 'lt;', 'gt;', 'apos;', 'quot;', 'fdft;']


@dataclass
class ConverterConfig:
    """External comment converter configuration."""

    command: str = ""  # Empty means no converter, use fallback escaping
    timeout: Optional[float] = 30.0  # Seconds; None waits forever
    encoding: str = "utf-8"

    @property
    def enabled(self) -> bool:
        return bool(self.command.strip())


@dataclass
class LinkConfig:
    """Auto-link targets for shorthand references."""

    reserved_entities: List[str] = field(
        default_factory=lambda: list(DEFAULT_RESERVED_ENTITIES)
    )
    attribute_href: str = "#p=attr-{name}"
    parameter_entity_href: str = "#p=pe-{name}"
    general_entity_href: str = "#p=ge-{name}"
    element_href: str = "#p=elem-{name}"


@dataclass
class EngineConfig:
    """
    Complete engine configuration.

    Example:
        config = EngineConfig()
        config.converter.command = "pandoc -f markdown -t html"
        save_config(config, Path("scomment.yaml"))
    """

    converter: ConverterConfig = field(default_factory=ConverterConfig)
    links: LinkConfig = field(default_factory=LinkConfig)

    log_level: str = "INFO"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'converter': asdict(self.converter),
            'links': asdict(self.links),
            'log_level': self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'EngineConfig':
        """Create from dictionary."""
        config = cls()

        if 'converter' in data:
            config.converter = ConverterConfig(**data['converter'])
        if 'links' in data:
            config.links = LinkConfig(**data['links'])

        if 'log_level' in data:
            config.log_level = data['log_level']

        return config


def load_config(config_path: Path) -> EngineConfig:
    """
    Load configuration from file.

    Supports JSON and YAML formats based on file extension.

    Args:
        config_path: Path to config file

    Returns:
        EngineConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If file format is not supported
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    with open(config_path, 'r', encoding='utf-8') as f:
        if suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(f)
        elif suffix == '.json':
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    logger.info(f"Loaded configuration from {config_path}")
    return EngineConfig.from_dict(data or {})


def save_config(config: EngineConfig, config_path: Path) -> None:
    """
    Save configuration to file.

    Supports JSON and YAML formats based on file extension.

    Raises:
        ValueError: If file format is not supported
    """
    suffix = config_path.suffix.lower()
    data = config.to_dict()

    if suffix not in ['.yaml', '.yml', '.json']:
        raise ValueError(f"Unsupported config format: {suffix}")

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        if suffix == '.json':
            json.dump(data, f, indent=2)
        else:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Saved configuration to {config_path}")


def get_default_config() -> EngineConfig:
    """Get default configuration."""
    return EngineConfig()
