"""
Discrete-time state-space model representation.

Provides a DiscreteStateSpaceModel class that keeps numpy arrays for the A, B, C, D
matrices, the current state vector, the sampling period and optional signal names
consistent with each other, and steps the system through input sequences.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sized
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike

from ..config.settings import get_settings
from ..errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    NameNotFoundError,
    NotSupportedError,
    NullArgumentError,
    NullInputError,
)
from . import linalg
from .names import CATEGORIES, SignalNames

log = logging.getLogger(__name__)


class Ownership(Enum):
    """
    How a model holds the matrices passed to it.

    OWNED copies every matrix into storage only the model uses.
    BORROWED keeps the caller's float64 arrays as they are; later in-place
    changes through the caller's handles are visible in the model.
    """
    OWNED = "owned"
    BORROWED = "borrowed"


def _resolve_ownership(ownership: Union[Ownership, str, None]) -> Ownership:
    if ownership is None:
        return Ownership(get_settings().default_ownership)
    if isinstance(ownership, Ownership):
        return ownership
    try:
        return Ownership(str(ownership).lower())
    except ValueError:
        raise InvalidArgumentError(f"Unknown ownership: {ownership!r}")


def _validate_ts(ts: Any) -> float:
    try:
        value = float(ts)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"Sampling time must be a number, got {ts!r}")
    if not (math.isfinite(value) and value > 0):
        raise InvalidArgumentError(f"Sampling time must be positive and finite, got {value!r}")
    return value


def _require_positive(n_states: int, n_inputs: int, n_outputs: int) -> None:
    for label, value in (("n_states", n_states), ("n_inputs", n_inputs), ("n_outputs", n_outputs)):
        if value < 1:
            raise InvalidArgumentError(f"{label} must be greater than zero (got: {value})")


def check_dimensions(
    A: np.ndarray,
    B: np.ndarray,
    C: np.ndarray,
    D: np.ndarray,
    n_states: int,
    n_inputs: int,
    n_outputs: int,
) -> None:
    """
    Verify that A, B, C, D fit the claimed dimensions.

    Pure; raises DimensionMismatchError for the first violation found.
    """
    checks = (
        ("A", "column", n_states, A.shape[1]),
        ("A", "row", n_states, A.shape[0]),
        ("B", "column", n_inputs, B.shape[1]),
        ("B", "row", n_states, B.shape[0]),
        ("C", "column", n_states, C.shape[1]),
        ("C", "row", n_outputs, C.shape[0]),
        ("D", "column", n_inputs, D.shape[1]),
        ("D", "row", n_outputs, D.shape[0]),
    )
    for target, axis, expected, actual in checks:
        if expected != actual:
            raise DimensionMismatchError(target, axis, expected, actual)


class DiscreteStateSpaceModel:
    """
    Discrete-time LTI state-space model:

        x[k+1] = A x[k] + B u[k]
        y[k]   = C x[k] + D u[k]

    Attributes:
        A: State transition matrix (n x n)
        B: Input to state matrix (n x m)
        C: State to output matrix (p x n)
        D: Feedthrough matrix (p x m)
        x: Current state vector (n,), advanced by every simulation step
        ts: Sampling period in seconds
        names: Optional state / input / output names

    Example:
        # First-order low-pass filter y[k+1] = 0.9 y[k] + 0.1 u[k]
        model = DiscreteStateSpaceModel([[0.9]], [[0.1]], [[1.0]], [[0.0]], ts=0.01)
        y = model.calc_response(np.ones((50, 1)))
    """

    def __init__(
        self,
        A: ArrayLike,
        B: ArrayLike,
        C: ArrayLike,
        D: ArrayLike,
        ts: Optional[float] = None,
        ownership: Union[Ownership, str, None] = None,
        names: Union[SignalNames, Mapping[str, Sequence[str]], None] = None,
        name: Optional[str] = None,
    ) -> None:
        own = _resolve_ownership(ownership)
        copy = own is Ownership.OWNED

        A = linalg.as_matrix(A, "A", copy=copy)
        B = linalg.as_matrix(B, "B", copy=copy)
        C = linalg.as_matrix(C, "C", copy=copy)
        D = linalg.as_matrix(D, "D", copy=copy)

        n, m, p = A.shape[1], B.shape[1], C.shape[0]
        _require_positive(n, m, p)
        check_dimensions(A, B, C, D, n, m, p)

        self._A = A
        self._B = B
        self._C = C
        self._D = D
        self._x = np.zeros(n, dtype=np.float64)
        self._ts = _validate_ts(get_settings().default_ts if ts is None else ts)
        self._names = SignalNames()
        self.ownership = own
        self.name = name

        if names is not None:
            self.names = names

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_dimensions(
        cls,
        n_states: int,
        n_inputs: int = 1,
        n_outputs: int = 1,
        ts: Optional[float] = None,
    ) -> "DiscreteStateSpaceModel":
        """
        Scaffold model: A = I, B = rectangular identity, C = ones, D = 0.

        Useful as a placeholder with the right shape, not as a physical system.
        """
        _require_positive(n_states, n_inputs, n_outputs)
        return cls(
            linalg.identity(n_states),
            linalg.identity(n_states, n_inputs),
            linalg.ones(n_outputs, n_states),
            linalg.zeros(n_outputs, n_inputs),
            ts=ts,
            ownership=Ownership.BORROWED,
        )

    @classmethod
    def from_state_matrix(
        cls,
        A: ArrayLike,
        ownership: Union[Ownership, str, None] = None,
        ts: Optional[float] = None,
    ) -> "DiscreteStateSpaceModel":
        """
        Single-input single-output model around a given A.

        B feeds the input into every state, C sums all states, D is zero.
        """
        own = _resolve_ownership(ownership)
        A = linalg.as_matrix(A, "A", copy=own is Ownership.OWNED)
        n = A.shape[1]
        return cls(
            A,
            linalg.ones(n, 1),
            linalg.ones(1, n),
            linalg.zeros(1, 1),
            ts=ts,
            ownership=own,
        )

    @classmethod
    def from_model(cls, model: "DiscreteStateSpaceModel", copy_state: bool = False) -> "DiscreteStateSpaceModel":
        """Independent deep copy of another model."""
        if model is None:
            raise NullArgumentError("model must not be None")
        clone = cls(
            model.A,
            model.B,
            model.C,
            model.D,
            ts=model.ts,
            ownership=Ownership.OWNED,
            names=model.names,
            name=model.name,
        )
        if copy_state:
            clone.x = model.x
        return clone

    def copy(self, copy_state: bool = False) -> "DiscreteStateSpaceModel":
        """Deep copy; the state is reset to zero unless copy_state is set."""
        return type(self).from_model(self, copy_state=copy_state)

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def n_states(self) -> int:
        """Number of state variables (n)."""
        return self._A.shape[1]

    @property
    def n_inputs(self) -> int:
        """Number of inputs (m)."""
        return self._B.shape[1]

    @property
    def n_outputs(self) -> int:
        """Number of outputs (p)."""
        return self._C.shape[0]

    # ------------------------------------------------------------------
    # Matrices
    # ------------------------------------------------------------------

    @property
    def A(self) -> np.ndarray:
        return self._A

    @A.setter
    def A(self, value: ArrayLike) -> None:
        self.set_matrices(A=value)

    @property
    def B(self) -> np.ndarray:
        return self._B

    @B.setter
    def B(self, value: ArrayLike) -> None:
        self.set_matrices(B=value)

    @property
    def C(self) -> np.ndarray:
        return self._C

    @C.setter
    def C(self, value: ArrayLike) -> None:
        self.set_matrices(C=value)

    @property
    def D(self) -> np.ndarray:
        return self._D

    @D.setter
    def D(self, value: ArrayLike) -> None:
        self.set_matrices(D=value)

    def set_matrices(
        self,
        A: Optional[ArrayLike] = None,
        B: Optional[ArrayLike] = None,
        C: Optional[ArrayLike] = None,
        D: Optional[ArrayLike] = None,
    ) -> None:
        """
        Replace any subset of the system matrices in one validated update.

        The candidate set is checked as a whole before anything is committed,
        so changing the number of states requires passing every affected
        matrix together. If the number of states changes the state vector is
        reset to zero; name groups whose dimension changed are cleared.
        """
        copy = self.ownership is Ownership.OWNED
        new_A = self._A if A is None else linalg.as_matrix(A, "A", copy=copy)
        new_B = self._B if B is None else linalg.as_matrix(B, "B", copy=copy)
        new_C = self._C if C is None else linalg.as_matrix(C, "C", copy=copy)
        new_D = self._D if D is None else linalg.as_matrix(D, "D", copy=copy)

        n, m, p = new_A.shape[1], new_B.shape[1], new_C.shape[0]
        _require_positive(n, m, p)
        check_dimensions(new_A, new_B, new_C, new_D, n, m, p)

        names = self._names
        if n != self.n_states:
            names = names.replace("states", None)
            self._x = np.zeros(n, dtype=np.float64)
        if m != self.n_inputs:
            names = names.replace("inputs", None)
        if p != self.n_outputs:
            names = names.replace("outputs", None)

        self._A, self._B, self._C, self._D = new_A, new_B, new_C, new_D
        self._names = names
        log.debug("Replaced system matrices: n=%d m=%d p=%d", n, m, p)

    # ------------------------------------------------------------------
    # State and sampling time
    # ------------------------------------------------------------------

    @property
    def x(self) -> np.ndarray:
        return self._x

    @x.setter
    def x(self, value: ArrayLike) -> None:
        vec = linalg.as_vector(value, "x")
        if vec.shape[0] != self.n_states:
            raise DimensionMismatchError("x", "length", self.n_states, vec.shape[0])
        self._x = vec

    @property
    def ts(self) -> float:
        return self._ts

    @ts.setter
    def ts(self, value: float) -> None:
        self._ts = _validate_ts(value)

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------

    @property
    def names(self) -> SignalNames:
        return self._names

    @names.setter
    def names(self, value: Union[SignalNames, Mapping[str, Sequence[str]], None]) -> None:
        if value is None:
            value = SignalNames()
        elif not isinstance(value, SignalNames):
            unknown = set(value) - set(CATEGORIES)
            if unknown:
                raise InvalidArgumentError(f"Unknown name categories: {sorted(unknown)}")
            value = SignalNames(**value)

        for category in CATEGORIES:
            self._check_name_length(category, value.get(category))
        self._names = value

    def _dimension_of(self, category: str) -> int:
        return {"states": self.n_states, "inputs": self.n_inputs, "outputs": self.n_outputs}[category]

    def _check_name_length(self, category: str, names: Optional[Sequence[str]]) -> None:
        if names is not None and len(names) != self._dimension_of(category):
            raise DimensionMismatchError(
                f"{category[:-1]}_names", "length", self._dimension_of(category), len(names)
            )

    def _set_names(self, category: str, names: Optional[Iterable[str]]) -> None:
        candidate = self._names.replace(category, names)
        self._check_name_length(category, candidate.get(category))
        self._names = candidate

    @property
    def state_names(self) -> Optional[tuple]:
        return self._names.states

    @state_names.setter
    def state_names(self, value: Optional[Iterable[str]]) -> None:
        self._set_names("states", value)

    @property
    def input_names(self) -> Optional[tuple]:
        return self._names.inputs

    @input_names.setter
    def input_names(self, value: Optional[Iterable[str]]) -> None:
        self._set_names("inputs", value)

    @property
    def output_names(self) -> Optional[tuple]:
        return self._names.outputs

    @output_names.setter
    def output_names(self, value: Optional[Iterable[str]]) -> None:
        self._set_names("outputs", value)

    def clear_names(self) -> None:
        """Drop every name group."""
        self._names = SignalNames()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def _input_vector(self, u: Any, index: int) -> np.ndarray:
        if u is None:
            raise NullInputError(index)
        vec = linalg.as_vector(u, f"u[{index}]")
        if vec.shape[0] != self.n_inputs:
            raise DimensionMismatchError(
                "u", "length", self.n_inputs, vec.shape[0], f"input vector at element {index}"
            )
        return vec

    def _state_vector(self, x: Optional[ArrayLike]) -> np.ndarray:
        if x is None:
            return self._x
        vec = linalg.as_vector(x, "x")
        if vec.shape[0] != self.n_states:
            raise DimensionMismatchError("x", "length", self.n_states, vec.shape[0])
        return vec

    def calc_outputs(self, u: ArrayLike, x: Optional[ArrayLike] = None) -> np.ndarray:
        """y = C x + D u for the given state (default: current state). Does not advance."""
        u_vec = self._input_vector(u, 0)
        return self._C @ self._state_vector(x) + self._D @ u_vec

    def calc_next_state(self, u: ArrayLike, x: Optional[ArrayLike] = None) -> np.ndarray:
        """x_next = A x + B u for the given state (default: current state). Does not advance."""
        u_vec = self._input_vector(u, 0)
        return self._A @ self._state_vector(x) + self._B @ u_vec

    def calc_response(self, inputs: Iterable[ArrayLike], recorder=None) -> np.ndarray:
        """
        Step the model through a sequence of input vectors.

        For each u[i] the output is computed from the state before the update,
        then the state advances. The model keeps the final state, so a second
        call continues where the first stopped.

        Args:
            inputs: Finite iterable of input vectors (length n_inputs each), or
                    a 2-D array with one row per step
            recorder: Optional JsonlLogger receiving one "step" event per step

        Returns:
            Output trajectory, shape (n_steps, n_outputs)

        Raises:
            NullInputError: An element of inputs is None
            DimensionMismatchError: An element has the wrong length

        On error nothing is returned and the model state is left as it was.
        """
        if inputs is None:
            raise NullArgumentError("inputs must not be None")
        if not isinstance(inputs, Sized):
            inputs = list(inputs)

        n_steps = len(inputs)
        y_out = np.empty((n_steps, self.n_outputs), dtype=np.float64)

        A, B, C, D = self._A, self._B, self._C, self._D
        x = self._x.copy()

        for i, u in enumerate(inputs):
            u_vec = self._input_vector(u, i)
            y = C @ x + D @ u_vec
            y_out[i] = y
            x = A @ x + B @ u_vec
            if recorder is not None:
                recorder.write("step", k=i, u=u_vec, y=y, x=x)

        self._x = x
        return y_out

    def step(self, u: ArrayLike) -> np.ndarray:
        """Advance one sample and return the output for it."""
        return self.calc_response([u])[0]

    # ------------------------------------------------------------------
    # Structural edits
    # ------------------------------------------------------------------

    def drop_output(self, output: Union[str, int]) -> None:
        """
        Remove one output (a row of C and D) in place.

        Args:
            output: Output name, or zero-based output index

        Raises:
            NotSupportedError: Dropping by name on a model without output names
            NameNotFoundError: The name is not an output of this model
            IndexOutOfRangeError: The index is outside [0, n_outputs)
            InvalidArgumentError: The model has only one output
        """
        outputs = self._names.outputs

        if isinstance(output, str):
            if outputs is None:
                raise NotSupportedError(
                    "Outputs can't be dropped by name if the outputs are not named"
                )
            if output not in outputs:
                raise NameNotFoundError(output, "output names")
            index = outputs.index(output)
        elif isinstance(output, (int, np.integer)) and not isinstance(output, bool):
            index = int(output)
            if index < 0 or index >= self.n_outputs:
                raise IndexOutOfRangeError(index, self.n_outputs, "output index")
        else:
            raise InvalidArgumentError(f"output must be a name or an index, got {type(output).__name__}")

        if self.n_outputs == 1:
            raise InvalidArgumentError("Can't drop the only output of a model")

        C = linalg.remove_row(self._C, index)
        D = linalg.remove_row(self._D, index)
        check_dimensions(self._A, self._B, C, D, self.n_states, self.n_inputs, self.n_outputs - 1)

        new_names = self._names
        if outputs is not None:
            new_names = new_names.replace("outputs", outputs[:index] + outputs[index + 1:])

        self._C, self._D = C, D
        self._names = new_names
        log.debug("Dropped output %d, %d outputs left", index, self.n_outputs)

    # ------------------------------------------------------------------
    # Analysis extension points
    # ------------------------------------------------------------------

    def is_stable(self) -> bool:
        raise NotImplementedError("Stability analysis is not implemented for discrete state-space models")

    def poles(self) -> np.ndarray:
        raise NotImplementedError("Pole extraction is not implemented for discrete state-space models")

    def zeros(self) -> np.ndarray:
        raise NotImplementedError("Zero extraction is not implemented for discrete state-space models")

    def impulse(self, n_steps: Optional[int] = None) -> np.ndarray:
        raise NotImplementedError("Impulse response is not implemented for discrete state-space models")

    def bode(self, n_points: int = 100, omega: Optional[ArrayLike] = None) -> np.ndarray:
        raise NotImplementedError("Bode response is not implemented for discrete state-space models")

    # ------------------------------------------------------------------
    # Comparison / display
    # ------------------------------------------------------------------

    def equals(self, other: "DiscreteStateSpaceModel", compare_state: bool = False) -> bool:
        """Exact equality of matrices, sampling time and names (and state if asked)."""
        if not isinstance(other, DiscreteStateSpaceModel):
            return False
        same = (
            linalg.matrices_equal(self._A, other.A)
            and linalg.matrices_equal(self._B, other.B)
            and linalg.matrices_equal(self._C, other.C)
            and linalg.matrices_equal(self._D, other.D)
            and self._ts == other.ts
            and self._names == other.names
        )
        if same and compare_state:
            same = bool(np.array_equal(self._x, other.x))
        return same

    def __repr__(self) -> str:
        return (
            f"DiscreteStateSpaceModel(n={self.n_states}, m={self.n_inputs}, p={self.n_outputs}, "
            f"ts={self._ts}, named={self._names.has_any})"
        )
