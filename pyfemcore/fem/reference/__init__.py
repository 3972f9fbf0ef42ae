# pyfemcore.fem.reference
"""
Table-driven reference shape families.

Every family is described by one row of ``_FAMILIES`` (dimension, symbolic
generator, reference nodes, corner nodes).  The polynomials are built once
with SymPy, lambdified, and evaluated by the single generic ``ShapeFamily``.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Tuple

import numpy as np
import sympy as sp

from .lagrange import (lagrange_1d, tensor_lagrange, serendipity_quad,
                       linear_triangle, P1_PAIRS, P2_PAIRS)

__all__ = ["ShapeFamily", "get_shapes", "FAMILY_NAMES"]

_SYMBOLS = sp.symbols("xi eta")


@dataclass(frozen=True)
class FamilySpec:
    name: str
    dim: int
    generator: Callable
    refnodes: Tuple[Tuple[float, ...], ...]   # one tuple per node
    corners: Tuple[int, ...]


def _line_nodes(n):
    return tuple((float(z),) for z in np.linspace(-1.0, 1.0, n + 1))


def _tensor_nodes(n, pairs):
    z = np.linspace(-1.0, 1.0, n + 1)
    return tuple((float(z[a]), float(z[b])) for a, b in pairs)


_FAMILIES = {
    "1dP1": FamilySpec("1dP1", 1, lambda xi: lagrange_1d(xi, 1),
                       _line_nodes(1), (0, 1)),
    "1dP2": FamilySpec("1dP2", 1, lambda xi: lagrange_1d(xi, 2),
                       _line_nodes(2), (0, 2)),
    "1dP3": FamilySpec("1dP3", 1, lambda xi: lagrange_1d(xi, 3),
                       _line_nodes(3), (0, 3)),
    "2dP1": FamilySpec("2dP1", 2, lambda xi, eta: tensor_lagrange(xi, eta, 1, P1_PAIRS),
                       _tensor_nodes(1, P1_PAIRS), (0, 1, 2, 3)),
    "2dP2": FamilySpec("2dP2", 2, lambda xi, eta: tensor_lagrange(xi, eta, 2, P2_PAIRS),
                       _tensor_nodes(2, P2_PAIRS), (0, 2, 4, 6)),
    "2dS2": FamilySpec("2dS2", 2, serendipity_quad,
                       _tensor_nodes(2, P2_PAIRS[:8]), (0, 2, 4, 6)),
    "2dT1": FamilySpec("2dT1", 2, linear_triangle,
                       ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0)), (0, 1, 2)),
}

FAMILY_NAMES = tuple(_FAMILIES)


@lru_cache(maxsize=None)
def _compile(name: str):
    """Lambdified ``N(xi)`` and ``dN(xi)`` for a family (built once)."""
    fam = _FAMILIES[name]
    syms = _SYMBOLS[:fam.dim]
    N_sym = sp.Matrix(fam.generator(*syms))
    dN_sym = N_sym.jacobian(syms)
    shape = sp.lambdify(syms, N_sym, "numpy")
    grad = sp.lambdify(syms, dN_sym, "numpy")
    return shape, grad


class ShapeFamily:
    """
    Flyweight for one element type.

    ``shapes(xi)`` overwrites ``shapes.N`` (basis values) and ``shapes.dN``
    (``nshapes x dim`` reference derivatives) at the reference point ``xi``
    and returns ``shapes``.  The arrays are scratch: they are only valid until
    the next evaluation, and callers such as the isoparametric rules may
    overwrite ``dN`` with spatial gradients.
    """

    def __init__(self, name: str):
        if name not in _FAMILIES:
            raise KeyError(name)
        self._family = _FAMILIES[name]
        self._shape_fn, self._grad_fn = _compile(name)
        self.N = np.zeros(self.nshapes)
        self.dN = np.zeros((self.nshapes, self.dim))

    @property
    def name(self) -> str:
        return self._family.name

    @property
    def dim(self) -> int:
        return self._family.dim

    @property
    def nshapes(self) -> int:
        return len(self._family.refnodes)

    @property
    def refnodes(self) -> np.ndarray:
        """Reference node coordinates, one column per node."""
        return np.array(self._family.refnodes, dtype=float).T

    @property
    def corners(self) -> Tuple[int, ...]:
        return self._family.corners

    def __call__(self, xi):
        args = np.atleast_1d(xi)
        if args.shape[0] != self.dim:
            raise ValueError(f"{self.name} expects a {self.dim}-d reference point, "
                             f"got {args.shape[0]} coordinates")
        self.N[:] = np.asarray(self._shape_fn(*args), dtype=float).reshape(-1)
        self.dN[:, :] = np.asarray(self._grad_fn(*args), dtype=float).reshape(self.dN.shape)
        return self

    def __repr__(self):
        return f"ShapeFamily({self.name!r})"


def get_shapes(name: str) -> ShapeFamily:
    """Return a fresh family instance (with its own scratch) by name."""
    return ShapeFamily(name)
