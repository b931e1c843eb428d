# tests/conftest.py

import logging

import numpy as np
import pytest

from discrete_lti.config.settings import Settings, set_settings
from discrete_lti.control import DiscreteStateSpaceModel
from discrete_lti.logger import PACKAGE_LOGGER


# ============== Isolation ==============

@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from built-in defaults, independent of DLTI_* env vars."""
    settings = Settings()
    set_settings(settings)
    yield settings
    set_settings(None)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    pkg = logging.getLogger(PACKAGE_LOGGER)
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
        h.close()
    pkg.propagate = True
    pkg.setLevel(logging.NOTSET)


# ============== Models ==============

@pytest.fixture
def doubling_model():
    """x[k+1] = 2 x[k] + u[k], y = x."""
    return DiscreteStateSpaceModel([[2.0]], [[1.0]], [[1.0]], [[0.0]], ts=1.0)


@pytest.fixture
def mimo_model():
    """2 states, 2 inputs, 3 outputs with nonzero feedthrough."""
    A = np.array([[0.5, 0.1], [-0.2, 0.8]])
    B = np.array([[1.0, 0.0], [0.5, 2.0]])
    C = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    D = np.array([[0.0, 0.0], [0.1, 0.0], [0.0, 0.3]])
    return DiscreteStateSpaceModel(A, B, C, D, ts=0.1)


@pytest.fixture
def named_mimo_model(mimo_model):
    mimo_model.names = {
        "states": ["pos", "vel"],
        "inputs": ["force", "torque"],
        "outputs": ["y_pos", "y_vel", "y_sum"],
    }
    return mimo_model
