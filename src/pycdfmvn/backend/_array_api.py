"""Backend selection: NumPy/SciPy by default, PyTorch when installed."""

from __future__ import annotations

from typing import Any, Literal

import numpy as np

BackendName = Literal["numpy", "torch"]

_BACKEND_NAMES = ("numpy", "torch")
_DEFAULT_BACKEND: BackendName = "numpy"

_backends: dict[str, Any] = {}


def _check_name(name: str) -> None:
    if name not in _BACKEND_NAMES:
        raise ValueError(f"Unknown backend: {name!r}. Use 'numpy' or 'torch'.")


def get_backend(name: BackendName | None = None) -> Any:
    """Return the backend object supplying the scalar primitives.

    Parameters
    ----------
    name : {"numpy", "torch"} or None
        Backend name. None selects the current default.

    Returns
    -------
    backend : NumpyBackend or TorchBackend
        Object exposing ``normal_cdf``, ``normal_ppf``, ``cholesky_ex``
        and array conversion helpers.
    """
    if name is None:
        name = _DEFAULT_BACKEND
    _check_name(name)

    if name not in _backends:
        if name == "numpy":
            from pycdfmvn.backend._numpy_backend import NumpyBackend
            _backends[name] = NumpyBackend()
        else:
            from pycdfmvn.backend._torch_backend import TorchBackend
            _backends[name] = TorchBackend()

    return _backends[name]


def set_backend(name: BackendName) -> None:
    """Set the backend used when no ``xp`` is passed and none is inferred."""
    global _DEFAULT_BACKEND
    _check_name(name)
    _DEFAULT_BACKEND = name


def array_namespace(*arrays: Any) -> Any:
    """Infer the backend from the inputs.

    A torch tensor anywhere among ``arrays`` selects the torch backend, a
    NumPy array selects NumPy; plain Python sequences and scalars fall
    through to the default backend.
    """
    for arr in arrays:
        if arr is None:
            continue
        if type(arr).__module__.startswith("torch"):
            return get_backend("torch")
        if isinstance(arr, np.ndarray):
            return get_backend("numpy")

    return get_backend()


def as_float64(xp: Any, x: Any) -> np.ndarray:
    """Convert a backend array (or sequence) to a float64 NumPy array."""
    return np.asarray(xp.to_numpy(x), dtype=np.float64)
