from .logger import (
    PACKAGE_LOGGER,
    DedupFilter,
    JsonlLogger,
    LogBundle,
    Logger,
    configure_logging,
)

__all__ = [
    "PACKAGE_LOGGER",
    "DedupFilter",
    "JsonlLogger",
    "LogBundle",
    "Logger",
    "configure_logging",
]
