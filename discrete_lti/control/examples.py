"""
Example usage of the discrete state-space module.

Run with: python -m discrete_lti.control.examples
"""

import numpy as np


def example_cascaded_filters():
    """
    Cascade two first-order low-pass filters and compare against running them one by one.

    G1: x1[k+1] = 0.9 x1 + 0.1 u,   v = x1
    G2: x2[k+1] = 0.5 x2 + 0.5 v,   y = x2
    """
    from discrete_lti.control import DiscreteStateSpaceModel, link

    print("=" * 60)
    print("Cascaded Low-Pass Filters")
    print("=" * 60)

    ts = 0.01
    G1 = DiscreteStateSpaceModel(
        [[0.9]], [[0.1]], [[1.0]], [[0.0]], ts=ts,
        names={"states": ["lp1"], "inputs": ["u"], "outputs": ["v"]},
    )
    G2 = DiscreteStateSpaceModel(
        [[0.5]], [[0.5]], [[1.0]], [[0.0]], ts=ts,
        names={"states": ["lp2"], "inputs": ["v"], "outputs": ["y"]},
    )

    G = link(G1, G2)
    print(f"\nLinked system: {G}")
    print(f"States: {G.state_names}, inputs: {G.input_names}, outputs: {G.output_names}")

    # Unit step, 50 samples
    u = np.ones((50, 1))
    y_linked = G.calc_response(u)

    # Same signal path, one model after the other
    v = G1.calc_response(u)
    y_chain = G2.calc_response(v)

    err = float(np.max(np.abs(y_linked - y_chain)))
    print(f"\nFinal output: {y_linked[-1, 0]:.4f}")
    print(f"Max difference linked vs. chained: {err:.2e}")

    return y_linked, y_chain


def example_parallel_plants():
    """
    Run two unrelated plants side by side, then drop one of the outputs.
    """
    from discrete_lti.control import DiscreteStateSpaceModel, combine

    print("\n" + "=" * 60)
    print("Parallel Plants")
    print("=" * 60)

    # Discretized double integrator (position, velocity), dt = 0.1
    dt = 0.1
    integrator = DiscreteStateSpaceModel(
        [[1.0, dt], [0.0, 1.0]],
        [[0.5 * dt ** 2], [dt]],
        [[1.0, 0.0], [0.0, 1.0]],
        [[0.0], [0.0]],
        ts=dt,
        names={"outputs": ["position", "velocity"]},
    )
    # First-order heater model
    heater = DiscreteStateSpaceModel(
        [[0.95]], [[0.05]], [[1.0]], [[0.0]],
        ts=dt,
        names={"outputs": ["temperature"]},
    )

    P = combine(integrator, heater)
    print(f"\nCombined system: {P}")
    print(f"Inputs: {P.input_names}")
    print(f"Outputs: {P.output_names}")

    P.drop_output("velocity")
    print(f"After dropping velocity: {P.output_names}")

    # Constant force on the integrator, constant power on the heater
    u = np.tile([1.0, 20.0], (30, 1))
    y = P.calc_response(u)
    print(f"\nAfter {len(u)} steps: position={y[-1, 0]:.3f}, temperature={y[-1, 1]:.3f}")

    return P, y


if __name__ == "__main__":
    # Run examples
    example_cascaded_filters()
    example_parallel_plants()

    print("\n" + "=" * 60)
    print("Examples complete!")
    print("=" * 60)
