"""Configuration module for param-emitter."""

from param_emitter.config.logging import configure_logging, get_logger
from param_emitter.config.settings import EmitterSettings, get_settings

__all__ = ["EmitterSettings", "configure_logging", "get_logger", "get_settings"]
