"""
Runtime settings for signature parsing, signing and verification

The only protocol-level tunable is the maximum clock skew tolerated for the
``created`` field. Settings are immutable and threaded through each call, so
there is no process-wide mutable state.
"""

import json
import os
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from ..exceptions import ConfigurationError

DEFAULT_MAX_TIME_SKEW = 30
DEFAULT_SLOW_OPERATION_MS = 50.0

ENV_PREFIX = "HTTPSIG_"

Clock = Callable[[], float]


@dataclass(frozen=True)
class SignatureSettings:
    """
    Signature settings

    Attributes:
        max_time_skew: Seconds a ``created`` timestamp may lie in the future
        clock: Returns the current time in seconds since the epoch
        slow_operation_ms: Sign/verify calls slower than this are logged as warnings
    """
    max_time_skew: int = DEFAULT_MAX_TIME_SKEW
    clock: Clock = field(default=time.time, compare=False)
    slow_operation_ms: float = DEFAULT_SLOW_OPERATION_MS

    def __post_init__(self):
        """Validate settings"""
        if isinstance(self.max_time_skew, bool) or not isinstance(self.max_time_skew, int):
            raise ConfigurationError("max_time_skew must be an integer number of seconds")
        if self.max_time_skew < 0:
            raise ConfigurationError("max_time_skew cannot be negative")
        if not callable(self.clock):
            raise ConfigurationError("clock must be callable")
        if self.slow_operation_ms <= 0:
            raise ConfigurationError("slow_operation_ms must be positive")

    def now(self) -> float:
        """Current time according to the configured clock."""
        return self.clock()

    def with_clock(self, clock: Clock) -> 'SignatureSettings':
        return replace(self, clock=clock)


DEFAULT_SETTINGS = SignatureSettings()


def resolve_settings(settings: Optional[SignatureSettings]) -> SignatureSettings:
    return settings if settings is not None else DEFAULT_SETTINGS


def load_settings_from_dict(data: Mapping[str, Any]) -> SignatureSettings:
    """
    Build settings from a plain mapping.

    Unknown keys are rejected so typos do not silently fall back to defaults.
    """
    known = {"max_time_skew", "slow_operation_ms"}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(
            f"Unknown settings: {', '.join(sorted(unknown))}",
            "UNKNOWN_SETTING",
            {"unknown": sorted(unknown)}
        )

    kwargs: Dict[str, Any] = {}
    try:
        if "max_time_skew" in data:
            kwargs["max_time_skew"] = int(data["max_time_skew"])
        if "slow_operation_ms" in data:
            kwargs["slow_operation_ms"] = float(data["slow_operation_ms"])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid settings format: {e}", "INVALID_FORMAT") from e

    return SignatureSettings(**kwargs)


def load_settings_from_json(json_string: str) -> SignatureSettings:
    """Load settings from a JSON object string"""
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Failed to parse settings JSON: {e}", "PARSE_ERROR") from e
    if not isinstance(data, dict):
        raise ConfigurationError("Settings JSON must be an object", "INVALID_FORMAT")
    return load_settings_from_dict(data)


def load_settings_from_file(file_path: Union[str, Path]) -> SignatureSettings:
    """Load settings from a JSON file"""
    try:
        with open(Path(file_path), 'r', encoding='utf-8') as f:
            json_string = f.read()
    except OSError as e:
        raise ConfigurationError(f"Failed to read settings file: {e}", "FILE_ERROR") from e
    return load_settings_from_json(json_string)


def load_settings_from_env(environ: Optional[Mapping[str, str]] = None, prefix: str = ENV_PREFIX) -> SignatureSettings:
    """
    Load settings from environment variables.

    Reads ``HTTPSIG_MAX_TIME_SKEW`` and ``HTTPSIG_SLOW_OPERATION_MS``; unset
    variables keep their defaults.
    """
    environ = os.environ if environ is None else environ
    data = {}
    for name in ("max_time_skew", "slow_operation_ms"):
        value = environ.get(prefix + name.upper())
        if value is not None and value.strip():
            data[name] = value.strip()
    return load_settings_from_dict(data)
