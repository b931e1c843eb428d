"""
Optional signal names for state-space models.

A model carries one SignalNames value. Each category (states, inputs,
outputs) is either absent (None) or a complete tuple of unique strings.
"""

from __future__ import annotations

from dataclasses import dataclass, replace as _dc_replace
from typing import Iterable, List, Optional, Tuple

from ..errors import DuplicateNameError, InvalidArgumentError

CATEGORIES = ("states", "inputs", "outputs")

NameTuple = Optional[Tuple[str, ...]]


def _normalize(names: Optional[Iterable[str]], category: str) -> NameTuple:
    if names is None:
        return None
    if isinstance(names, str):
        raise InvalidArgumentError(f"{category} names must be a sequence of strings, not a single string")

    result = tuple(names)
    for n in result:
        if not isinstance(n, str):
            raise InvalidArgumentError(f"{category} names must be strings, got {type(n).__name__}")

    seen = set()
    for n in result:
        if n in seen:
            raise DuplicateNameError(f"duplicate {category} name {n!r}")
        seen.add(n)
    return result


@dataclass(frozen=True)
class SignalNames:
    """Names for the states, inputs and outputs of a model."""

    states: NameTuple = None
    inputs: NameTuple = None
    outputs: NameTuple = None

    def __post_init__(self) -> None:
        for category in CATEGORIES:
            object.__setattr__(self, category, _normalize(getattr(self, category), category))

    @property
    def has_any(self) -> bool:
        return any(getattr(self, c) is not None for c in CATEGORIES)

    def get(self, category: str) -> NameTuple:
        if category not in CATEGORIES:
            raise InvalidArgumentError(f"unknown name category {category!r}")
        return getattr(self, category)

    def replace(self, category: str, names: Optional[Iterable[str]]) -> "SignalNames":
        """Return a copy with one category set (or cleared with None)."""
        if category not in CATEGORIES:
            raise InvalidArgumentError(f"unknown name category {category!r}")
        return _dc_replace(self, **{category: names})

    def to_dict(self) -> dict:
        return {c: list(getattr(self, c)) for c in CATEGORIES if getattr(self, c) is not None}


def make_names(size: int, prefix: str = "") -> List[str]:
    """["<prefix>0", "<prefix>1", ...] with `size` entries."""
    return [f"{prefix}{i}" for i in range(size)]
