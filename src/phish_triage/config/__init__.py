"""Configuration loading."""

from phish_triage.config.settings import AppConfig, load_config

__all__ = ["AppConfig", "load_config"]
