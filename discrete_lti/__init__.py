"""
discrete_lti: discrete-time linear time-invariant state-space models.

This package provides a dimension-checked state-space model with optional
signal names, time-stepped simulation, and the structural composition
operators combine (parallel) and link (series).
"""

from .control import (
    DiscreteStateSpaceModel,
    Ownership,
    SignalNames,
    check_dimensions,
    combine,
    link,
    make_names,
)
from .config import Settings, get_settings, set_settings
from .config.loader import load_model, model_from_dict, model_to_dict, save_model
from .errors import (
    DimensionMismatchError,
    DuplicateNameError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    NameNotFoundError,
    NotSupportedError,
    NullArgumentError,
    NullInputError,
    SamplingTimeMismatchError,
    StateSpaceError,
)
from .logger import JsonlLogger, LogBundle, Logger, configure_logging

__version__ = "0.1.0"

__all__ = [
    "DiscreteStateSpaceModel", "Ownership", "SignalNames", "check_dimensions",
    "combine", "link", "make_names",
    "Settings", "get_settings", "set_settings",
    "load_model", "model_from_dict", "model_to_dict", "save_model",
    "StateSpaceError", "DimensionMismatchError", "InvalidArgumentError",
    "SamplingTimeMismatchError", "DuplicateNameError", "NullArgumentError",
    "NullInputError", "NotSupportedError", "NameNotFoundError", "IndexOutOfRangeError",
    "JsonlLogger", "LogBundle", "Logger", "configure_logging",
]
