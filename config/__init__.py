"""
Configuration module for graph sampling.

This module provides configuration loading and validation utilities.
"""

from pathlib import Path
import yaml
from typing import Dict, Any, Optional

from graph_sampling.engine import SamplingConfig


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, loads default.yaml

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = Path(__file__).parent / "default.yaml"
    else:
        config_path = Path(config_path)

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def get_default_config() -> Dict[str, Any]:
    """Get default configuration dictionary."""
    return load_config()


def load_sampling_config(config_path: Optional[str] = None) -> SamplingConfig:
    """
    Load the 'sampling' section of a config file as a SamplingConfig.

    Args:
        config_path: Path to config file. If None, loads default.yaml

    Returns:
        Validated SamplingConfig
    """
    config = load_config(config_path)
    return SamplingConfig.from_dict(config.get('sampling', {}))


__all__ = ['load_config', 'get_default_config', 'load_sampling_config']
