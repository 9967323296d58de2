"""
Configuration management for the HTTP Signatures SDK
"""

from .settings import (
    SignatureSettings,
    DEFAULT_SETTINGS,
    DEFAULT_MAX_TIME_SKEW,
    resolve_settings,
    load_settings_from_dict,
    load_settings_from_json,
    load_settings_from_file,
    load_settings_from_env,
)

__all__ = [
    'SignatureSettings',
    'DEFAULT_SETTINGS',
    'DEFAULT_MAX_TIME_SKEW',
    'resolve_settings',
    'load_settings_from_dict',
    'load_settings_from_json',
    'load_settings_from_file',
    'load_settings_from_env',
]
