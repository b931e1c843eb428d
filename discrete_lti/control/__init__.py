"""
Discrete-time LTI state-space models and their composition.

Example usage:
    from discrete_lti.control import DiscreteStateSpaceModel, link, combine

    # Two first-order filters
    G1 = DiscreteStateSpaceModel([[0.9]], [[0.1]], [[1.0]], [[0.0]], ts=0.01)
    G2 = DiscreteStateSpaceModel([[0.5]], [[0.5]], [[1.0]], [[0.0]], ts=0.01)

    # Cascade them: u -> G1 -> G2 -> y
    G = link(G1, G2)
    y = G.calc_response(np.ones((100, 1)))

    # Or run them side by side
    P = combine(G1, G2)

See discrete_lti.control.examples for more detailed examples.
"""

from .state_space import DiscreteStateSpaceModel, Ownership, check_dimensions
from .composition import combine, link
from .names import SignalNames, make_names

__all__ = [
    # Models
    "DiscreteStateSpaceModel",
    "Ownership",
    "check_dimensions",
    # Names
    "SignalNames",
    "make_names",
    # Composition
    "combine",
    "link",
]
