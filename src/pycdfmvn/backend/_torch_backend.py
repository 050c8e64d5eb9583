"""PyTorch backend implementation (optional dependency)."""

from __future__ import annotations

import math
from typing import Any


def _import_torch():
    """Lazy import of torch."""
    try:
        import torch
        return torch
    except ImportError as e:
        raise ImportError(
            "PyTorch is required for the torch backend. "
            "Install it with: pip install pycdfmvn[torch]"
        ) from e


class TorchBackend:
    """Backend wrapping PyTorch tensors.

    The lattice kernel itself runs on NumPy arrays; this backend lets
    callers pass tensors and supplies tensor versions of the primitives.
    """

    name = "torch"

    def __init__(self, device: str = "cpu", dtype: Any = None):
        self._torch = _import_torch()
        self.device = device
        self.float64 = self._torch.float64
        self._default_dtype = dtype or self._torch.float64

    # --- Array creation ---
    def array(self, data, dtype=None):
        dtype = dtype or self._default_dtype
        if isinstance(data, self._torch.Tensor):
            return data.to(device=self.device, dtype=dtype)
        return self._torch.tensor(data, dtype=dtype, device=self.device)

    # --- Statistical distributions ---
    def normal_cdf(self, x):
        """Standard normal CDF using erfc for numerical stability."""
        return 0.5 * self._torch.erfc(-x / math.sqrt(2.0))

    def normal_ppf(self, p):
        """Standard normal quantile (inverse CDF)."""
        return self._torch.special.ndtri(p)

    # --- Linear algebra ---
    def cholesky_ex(self, A):
        """Lower Cholesky factor and a success flag (``info == 0``)."""
        L, info = self._torch.linalg.cholesky_ex(A)
        ok = int(info) == 0 and bool(self._torch.isfinite(L).all())
        return L, ok

    # --- Conversion ---
    def to_numpy(self, x):
        if isinstance(x, self._torch.Tensor):
            return x.detach().cpu().numpy()
        import numpy as np
        return np.asarray(x)
