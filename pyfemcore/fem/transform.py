"""pyfemcore.fem.transform
Reference → spatial mapping: isoparametric map, Jacobian LU, det, gradients.

With x = χ(ξ) and J = ∂χ/∂ξ, reference gradients map to spatial ones by
∇ₓf = J⁻ᵀ ∇_ξ f.  The Jacobian is factored once per point (LAPACK getrf) and
that factorization serves both the determinant and the gradient transform
(getrs with the transpose flag).  ``J`` and ``ipiv`` are caller-owned scratch
reused across points and elements; allocate them with ``jacobian_scratch``.
"""
import os

import numpy as np
from scipy.linalg import lapack

__all__ = ["InvertedElementError", "jacobian_scratch", "r2s_factor", "r2s_det",
           "r2s_gradients", "isoparametric", "check_orientation"]

_skip_orientation = os.getenv("PYFEMCORE_SKIP_ORIENTATION_CHECK", "").lower() in {"1", "true", "yes"}


class InvertedElementError(ValueError):
    """Non-positive Jacobian determinant (inverted or degenerate element)."""


def jacobian_scratch(d: int):
    """Persistent ``(J, ipiv)`` pair; ``J`` is Fortran ordered so LAPACK works in place."""
    return np.zeros((d, d), order="F"), np.zeros(d, dtype=np.int32)


def r2s_factor(J, ipiv):
    """LU-factor ``J`` in place (partial pivoting); pivots go to ``ipiv``."""
    lu, piv, info = lapack.dgetrf(J, overwrite_a=1)
    if info < 0:
        raise ValueError(f"dgetrf: illegal value in argument {-info}")
    if not np.shares_memory(lu, J):
        J[...] = lu
    ipiv[:] = piv
    return J, ipiv


def r2s_det(J, ipiv) -> float:
    """Determinant from an LU factorization produced by ``r2s_factor``."""
    detJ = 1.0
    for k in range(J.shape[1]):
        detJ *= J[k, k]
        if ipiv[k] != k:
            detJ = -detJ
    return detJ


def r2s_gradients(J, ipiv, g):
    """
    Overwrite reference gradients with spatial ones, ``g <- g J⁻¹``.

    ``g`` holds one gradient per row (``m x d``), or is a shape family whose
    ``dN`` is transformed.  Solved as ``Jᵀ gᵀ_new = gᵀ``.
    """
    if hasattr(g, "dN"):
        g = g.dN
    gT = g.T
    x, info = lapack.dgetrs(J, ipiv, gT, trans=1, overwrite_b=1)
    if info < 0:
        raise ValueError(f"dgetrs: illegal value in argument {-info}")
    if not np.shares_memory(x, g):
        gT[...] = x
    return g


def isoparametric(shapes, xnodal, x, J):
    """
    Evaluate ``shapes`` at reference point ``x`` and overwrite ``x`` with the
    spatial point ``xnodal @ N`` and ``J`` with ``xnodal @ dN``.
    """
    shapes(x)
    np.matmul(xnodal, shapes.N, out=x)
    np.matmul(xnodal, shapes.dN, out=J)
    return x


def check_orientation(detJ: float) -> float:
    if detJ <= 0.0 and not _skip_orientation:
        raise InvertedElementError(f"non-positive Jacobian determinant {detJ:.6g}")
    return detJ
