"""
Structural composition of discrete state-space models.

combine() runs two models side by side (parallel, no signal coupling);
link() feeds the outputs of one model into the inputs of another (series).
Both return a new independent model and leave their arguments untouched.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import numpy as np

from ..config.settings import get_settings
from ..errors import NotSupportedError, SamplingTimeMismatchError
from . import linalg
from .names import CATEGORIES, SignalNames, make_names
from .state_space import DiscreteStateSpaceModel, Ownership

log = logging.getLogger(__name__)


def _names_or_default(names: Optional[Sequence[str]], size: int, prefix: str) -> List[str]:
    return list(names) if names is not None else make_names(size, prefix)


def combine(
    g1: DiscreteStateSpaceModel,
    g2: DiscreteStateSpaceModel,
    strict_ts: Optional[bool] = None,
) -> DiscreteStateSpaceModel:
    """
    Combine two models in parallel by joining their matrices block-diagonally.

        A = diag(A1, A2)    B = diag(B1, B2)
        C = diag(C1, C2)    D = diag(D1, D2)

    The result has n1 + n2 states, m1 + m2 inputs and p1 + p2 outputs with no
    coupling between the two halves.

    Args:
        g1: First model (upper-left blocks)
        g2: Second model (lower-right blocks)
        strict_ts: Require equal sampling times. Defaults to
                   Settings.strict_combine_ts. When False a mismatch is only
                   logged and the result uses g1.ts.

    Returns:
        New model. If either side carries any names the result is fully
        named; unnamed groups are filled with "G1_<i>" / "G2_<i>".

    Raises:
        NotSupportedError: One model names a group the other does not
        SamplingTimeMismatchError: strict_ts and g1.ts != g2.ts
    """
    for category in CATEGORIES:
        if (g1.names.get(category) is None) != (g2.names.get(category) is None):
            raise NotSupportedError(
                f"Combining a model with named {category} and a model with unnamed {category} is not supported"
            )

    if strict_ts is None:
        strict_ts = get_settings().strict_combine_ts
    if g1.ts != g2.ts:
        if strict_ts:
            raise SamplingTimeMismatchError(g1.ts, g2.ts, "Combine")
        log.warning("Combining models with different sampling times (%r vs %r), using %r", g1.ts, g2.ts, g1.ts)

    names = None
    if g1.names.has_any or g2.names.has_any:
        sizes = {
            "states": (g1.n_states, g2.n_states),
            "inputs": (g1.n_inputs, g2.n_inputs),
            "outputs": (g1.n_outputs, g2.n_outputs),
        }
        names = SignalNames(**{
            c: _names_or_default(g1.names.get(c), sizes[c][0], "G1_")
            + _names_or_default(g2.names.get(c), sizes[c][1], "G2_")
            for c in CATEGORIES
        })

    G = DiscreteStateSpaceModel(
        linalg.block_diag(g1.A, g2.A),
        linalg.block_diag(g1.B, g2.B),
        linalg.block_diag(g1.C, g2.C),
        linalg.block_diag(g1.D, g2.D),
        ts=g1.ts,
        ownership=Ownership.BORROWED,
        names=names,
    )
    log.debug("Combined %r and %r into %r", g1, g2, G)
    return G


def link(g1: DiscreteStateSpaceModel, g2: DiscreteStateSpaceModel) -> DiscreteStateSpaceModel:
    """
    Link (cascade) two models by feeding the outputs of g1 into the inputs of g2.

    With the joint state [x1; x2]:

        A = [[A1,    0 ],     B = [[B1   ],
             [B2 C1, A2]]          [B2 D1]]

        C = [D2 C1, C2]       D = D2 D1

    Input and output names must match if present. The internal states of g1
    and g2 are not carried over; the result starts from zero.

    Raises:
        NotSupportedError: Output names of g1 and input names of g2 are not
                           both present or both absent, differ, or the
                           signal counts do not match
        SamplingTimeMismatchError: g1.ts != g2.ts
    """
    if (g1.output_names is None) != (g2.input_names is None):
        raise NotSupportedError(
            "Linking non named outputs with named inputs or vice versa is not supported, "
            "either drop all names first or name both sides"
        )

    if g1.output_names is not None and g2.input_names is not None:
        if tuple(g1.output_names) != tuple(g2.input_names):
            raise NotSupportedError(
                "To link two named models the output names of the first model must equal "
                "the input names of the second model. Drop all names to ignore this."
            )
    elif g1.n_outputs != g2.n_inputs:
        raise NotSupportedError(
            f"To link two models the number of outputs of the first model ({g1.n_outputs}) "
            f"must match the number of inputs of the second model ({g2.n_inputs})"
        )

    if g1.ts != g2.ts:
        raise SamplingTimeMismatchError(g1.ts, g2.ts, "Link")

    n1, n2 = g1.n_states, g2.n_states
    m = g1.n_inputs
    p = g2.n_outputs

    A = linalg.zeros(n1 + n2, n1 + n2)
    linalg.set_block(A, 0, 0, g1.A)
    linalg.set_block(A, n1, 0, g2.B @ g1.C)
    linalg.set_block(A, n1, n1, g2.A)

    B = linalg.zeros(n1 + n2, m)
    linalg.set_block(B, 0, 0, g1.B)
    linalg.set_block(B, n1, 0, g2.B @ g1.D)

    C = linalg.zeros(p, n1 + n2)
    linalg.set_block(C, 0, 0, g2.D @ g1.C)
    linalg.set_block(C, 0, n1, g2.C)

    D = np.asarray(g2.D @ g1.D, dtype=np.float64)

    states = None
    if g1.state_names is not None or g2.state_names is not None:
        states = _names_or_default(g1.state_names, n1, "G1_") + _names_or_default(g2.state_names, n2, "G2_")

    G = DiscreteStateSpaceModel(
        A,
        B,
        C,
        D,
        ts=g1.ts,
        ownership=Ownership.BORROWED,
        names=SignalNames(states=states, inputs=g1.input_names, outputs=g2.output_names),
    )
    log.debug("Linked %r -> %r into %r", g1, g2, G)
    return G
