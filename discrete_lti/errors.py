# discrete_lti/errors.py
"""
Exceptions raised by discrete_lti.

Every error derives from StateSpaceError and, where one fits, from the
matching builtin (ValueError, TypeError, KeyError, IndexError) so callers can
catch either.
"""

from __future__ import annotations

from typing import Any, Optional


class StateSpaceError(Exception):
    """Base class for all discrete_lti errors."""


class DimensionMismatchError(StateSpaceError, ValueError):
    """
    A matrix, vector or name list does not have the shape the model requires.

    Attributes:
        target: Offending object ("A", "B", "u", "output_names", ...)
        axis: "row", "column" or "length"
        expected: Required size along the axis
        actual: Size that was given
    """

    def __init__(
        self,
        target: str,
        axis: str,
        expected: int,
        actual: int,
        detail: Optional[str] = None,
    ) -> None:
        self.target = target
        self.axis = axis
        self.expected = expected
        self.actual = actual
        msg = f"{target} {axis} count mismatch (expected: {expected}, got: {actual})"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class InvalidArgumentError(StateSpaceError, ValueError):
    """An argument has an invalid value (non-positive dimension, bad Ts, ...)."""


class SamplingTimeMismatchError(InvalidArgumentError):
    """Two models that must share one sampling period do not."""

    def __init__(self, ts1: float, ts2: float, operation: str) -> None:
        self.ts1 = ts1
        self.ts2 = ts2
        super().__init__(
            f"{operation} not possible, the models have different sampling times "
            f"({ts1!r} vs {ts2!r})"
        )


class DuplicateNameError(InvalidArgumentError):
    """A signal name appears more than once within one name group."""


class NullArgumentError(StateSpaceError, TypeError):
    """A required matrix or vector was None."""


class NullInputError(NullArgumentError):
    """An input vector inside a simulation sequence was None."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__(f"u vector at element {index} is None")


class NotSupportedError(StateSpaceError):
    """A structurally incompatible request (asymmetric names, mismatched links)."""


class NameNotFoundError(StateSpaceError, KeyError):
    """A name-based lookup referenced a signal the model does not have."""

    def __init__(self, name: Any, group: str) -> None:
        self.name = name
        self.group = group
        super().__init__(name)

    def __str__(self) -> str:
        return f"{self.name!r} was not found in the {self.group}"


class IndexOutOfRangeError(StateSpaceError, IndexError):
    """An index-based lookup was outside the valid range."""

    def __init__(self, index: int, size: int, what: str = "index") -> None:
        self.index = index
        self.size = size
        super().__init__(f"{what} {index} out of range [0, {size})")
