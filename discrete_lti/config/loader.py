# discrete_lti/config/loader.py
"""
Model definition loader.

Load discrete state-space models from YAML or JSON files and write them back.

Example file:
    name: lowpass
    ts: 0.01
    A: [[0.9]]
    B: [[0.1]]
    C: [[1.0]]
    D: [[0.0]]          # optional, zeros by default
    x0: [0.0]           # optional
    names:              # optional, any subset of states / inputs / outputs
      inputs: [u]
      outputs: [y]

Example:
    model = load_model("models/lowpass.yaml")
    y = model.calc_response(np.ones((100, 1)))
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..control import linalg
from ..control.state_space import DiscreteStateSpaceModel
from ..errors import NullArgumentError

log = logging.getLogger(__name__)


# =============================================================================
# File Loading
# =============================================================================

def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML configuration file."""
    with open(path, "r") as f:
        return yaml.safe_load(f)


def load_json(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a JSON configuration file."""
    with open(path, "r") as f:
        return json.load(f)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(path)
    if path.suffix in (".yaml", ".yml"):
        return load_yaml(path)
    elif path.suffix == ".json":
        return load_json(path)
    else:
        # YAML is a superset of JSON
        return load_yaml(path)


def save_yaml(data: Dict[str, Any], path: Union[str, Path]):
    """Save configuration to YAML file."""
    with open(path, "w") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


def save_json(data: Dict[str, Any], path: Union[str, Path], indent: int = 2):
    """Save configuration to JSON file."""
    with open(path, "w") as f:
        json.dump(data, f, indent=indent)


# =============================================================================
# Model <-> dict
# =============================================================================

def model_from_dict(data: Dict[str, Any]) -> DiscreteStateSpaceModel:
    """
    Build a model from a plain dictionary (as read from YAML / JSON).

    A, B and C are required; D defaults to zeros of shape (p, m).
    """
    if not data:
        raise NullArgumentError("model definition is empty")

    for key in ("A", "B", "C"):
        if data.get(key) is None:
            raise NullArgumentError(f"model definition is missing matrix {key}")

    D = data.get("D")
    if D is None:
        B = linalg.as_matrix(data["B"], "B")
        C = linalg.as_matrix(data["C"], "C")
        D = linalg.zeros(C.shape[0], B.shape[1])

    model = DiscreteStateSpaceModel(
        data["A"],
        data["B"],
        data["C"],
        D,
        ts=data.get("ts"),
        names=data.get("names"),
        name=data.get("name"),
    )

    if data.get("x0") is not None:
        model.x = data["x0"]

    return model


def model_to_dict(model: DiscreteStateSpaceModel, include_state: bool = False) -> Dict[str, Any]:
    """Plain-Python representation of a model, suitable for YAML / JSON."""
    data: Dict[str, Any] = {}
    if model.name:
        data["name"] = model.name
    data["ts"] = model.ts
    data["A"] = model.A.tolist()
    data["B"] = model.B.tolist()
    data["C"] = model.C.tolist()
    data["D"] = model.D.tolist()
    if include_state:
        data["x0"] = model.x.tolist()
    names = model.names.to_dict()
    if names:
        data["names"] = names
    return data


# =============================================================================
# Convenience Functions
# =============================================================================

def load_model(path: Union[str, Path]) -> DiscreteStateSpaceModel:
    """Load a model definition file and build the model."""
    model = model_from_dict(load_config(path))
    log.debug("Loaded %r from %s", model, path)
    return model


def save_model(
    model: DiscreteStateSpaceModel,
    path: Union[str, Path],
    include_state: bool = False,
):
    """Save a model to YAML or JSON, chosen by the file suffix."""
    path = Path(path)
    data = model_to_dict(model, include_state=include_state)
    if path.suffix == ".json":
        save_json(data, path)
    else:
        save_yaml(data, path)
