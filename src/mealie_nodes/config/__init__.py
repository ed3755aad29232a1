"""Configuration package."""
from mealie_nodes.config.settings import Settings, get_settings, reset_settings

__all__ = ["get_settings", "reset_settings", "Settings"]
