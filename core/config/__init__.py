# -*- coding: utf-8 -*-
"""Configuration (conf/settings.ini + environment overrides)."""

from core.config.loader import DEFAULT_CONFIG_PATH, ENV_KEYS, ConfigLoader, ExtractConfig, resolve_config

__all__ = ["DEFAULT_CONFIG_PATH", "ENV_KEYS", "ConfigLoader", "ExtractConfig", "resolve_config"]
