# discrete_lti/config/settings.py
# Central runtime settings for discrete_lti.
# Values can be overridden via DLTI_* environment variables or set at runtime.

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

OWNERSHIP_CHOICES = ("owned", "borrowed")


def _env_bool(key: str, default: bool) -> bool:
    """Read a boolean from environment variable."""
    val = os.environ.get(key, "").lower()
    if val in ("1", "true", "yes", "on"):
        return True
    if val in ("0", "false", "no", "off"):
        return False
    return default


def _env_float(key: str, default: float) -> float:
    val = os.environ.get(key, "").strip()
    if not val:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {val!r}")


def _env_str(key: str, default: str) -> str:
    val = os.environ.get(key, "").strip()
    return val if val else default


@dataclass
class Settings:
    """
    Runtime settings for model construction, composition and logging.

    Usage:
        settings = Settings.from_env()  # Load from environment
        settings = Settings(default_ts=0.01, strict_combine_ts=False)  # Manual config
    """

    # ==========================================================================
    # MODEL DEFAULTS
    # ==========================================================================
    default_ts: float = 1.0
    default_ownership: str = "owned"

    # ==========================================================================
    # COMPOSITION
    # ==========================================================================
    strict_combine_ts: bool = True

    # ==========================================================================
    # LOGGING
    # ==========================================================================
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_console: bool = False
    dedup_cooldown_s: float = 0.0

    def __post_init__(self):
        """Validate field values."""
        if not (math.isfinite(self.default_ts) and self.default_ts > 0):
            raise ValueError(f"default_ts must be a positive finite number, got {self.default_ts!r}")

        self.default_ownership = str(self.default_ownership).lower()
        if self.default_ownership not in OWNERSHIP_CHOICES:
            raise ValueError(
                f"default_ownership must be one of {OWNERSHIP_CHOICES}, got {self.default_ownership!r}"
            )

        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level}")

        if self.dedup_cooldown_s < 0:
            raise ValueError("dedup_cooldown_s must be >= 0")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            default_ts=_env_float("DLTI_DEFAULT_TS", 1.0),
            default_ownership=_env_str("DLTI_DEFAULT_OWNERSHIP", "owned"),
            strict_combine_ts=_env_bool("DLTI_STRICT_COMBINE_TS", True),
            log_level=_env_str("DLTI_LOG_LEVEL", "INFO"),
            log_dir=_env_str("DLTI_LOG_DIR", "logs"),
            log_console=_env_bool("DLTI_LOG_CONSOLE", False),
            dedup_cooldown_s=_env_float("DLTI_DEDUP_COOLDOWN_S", 0.0),
        )

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)

    def summary(self) -> str:
        """Return a summary of the active settings."""
        lines = [
            "=== discrete_lti settings ===",
            f"Model: TS={self.default_ts} OWNERSHIP={self.default_ownership}",
            f"Composition: STRICT_COMBINE_TS={int(self.strict_combine_ts)}",
            f"Logging: LEVEL={self.log_level} DIR={self.log_dir} CONSOLE={int(self.log_console)}",
        ]
        return "\n".join(lines)


# Default global instance - can be overridden at runtime
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _default_settings
    if _default_settings is None:
        _default_settings = Settings.from_env()
    return _default_settings


def set_settings(settings: Optional[Settings]) -> None:
    """Set the global settings instance. None re-reads the environment on next access."""
    global _default_settings
    _default_settings = settings
