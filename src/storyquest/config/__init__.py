"""Configuration: package defaults merged with YAML files and environment."""

from storyquest.config.hierarchy import load_config_hierarchy

__all__ = ["load_config_hierarchy"]
