import numpy as np
from typing import Optional

from pyfemcore.fem import transform
from pyfemcore.fem.transform import jacobian_scratch, r2s_det, r2s_factor, r2s_gradients


class Mesh:
    """
    Node coordinates and element connectivity for a single element type.

    ``X`` is ``(d, numnp)`` with one column per node; ``elt`` is
    ``(nen, numelt)`` with one column of zero-based node numbers per element.
    ``shapes`` is the shared shape family (flyweight) of every element.
    Element orientation is not checked here; inverted elements are reported
    when a mapped quadrature weight is formed.
    """

    def __init__(self, shapes, X: np.ndarray, elt: np.ndarray):
        self.shapes = shapes
        self.X = np.asarray(X, dtype=float)
        self.elt = np.asarray(elt, dtype=np.int64)
        if self.X.ndim != 2 or self.X.shape[0] != shapes.dim:
            raise ValueError(f"X must be ({shapes.dim}, numnp), got {self.X.shape}")
        if self.elt.ndim != 2 or self.elt.shape[0] != shapes.nshapes:
            raise ValueError(f"elt must have {shapes.nshapes} rows for {shapes.name}, "
                             f"got shape {self.elt.shape}")
        if self.elt.size and (self.elt.min() < 0 or self.elt.max() >= self.numnp):
            raise ValueError(f"connectivity refers to nodes outside 0..{self.numnp - 1}")

    @classmethod
    def empty(cls, shapes, numnp: int, numelt: int) -> "Mesh":
        """Zeroed storage; node numbers all point at node 0 until filled."""
        return cls(shapes, np.zeros((shapes.dim, numnp)),
                   np.zeros((shapes.nshapes, numelt), dtype=np.int64))

    @property
    def dim(self) -> int:
        return self.X.shape[0]

    @property
    def numnp(self) -> int:
        return self.X.shape[1]

    @property
    def numelt(self) -> int:
        return self.elt.shape[1]

    @property
    def nen(self) -> int:
        return self.elt.shape[0]

    def element_nodes(self, eltid: int) -> np.ndarray:
        return self.elt[:, eltid]

    def element_coords(self, eltid: int) -> np.ndarray:
        """Nodal coordinates of one element, ``(d, nen)``."""
        return self.X[:, self.elt[:, eltid]]

    def to_spatial(self, eltid: int, xref, J: Optional[np.ndarray] = None,
                   ipiv: Optional[np.ndarray] = None):
        """
        Map reference point ``xref`` of element ``eltid`` to space.

        Returns ``(x, detJ)``.  Afterwards ``self.shapes.N`` holds the basis
        values and ``self.shapes.dN`` the *spatial* gradients at ``x``.
        ``J``/``ipiv`` are optional persistent scratch.
        """
        if J is None or ipiv is None:
            J, ipiv = jacobian_scratch(self.dim)
        x = np.array(xref, dtype=float).reshape(-1)
        transform.isoparametric(self.shapes, self.element_coords(eltid), x, J)
        r2s_factor(J, ipiv)
        r2s_gradients(J, ipiv, self.shapes)
        detJ = transform.check_orientation(r2s_det(J, ipiv))
        return x, detJ

    def __repr__(self):
        return (f"<Mesh {self.shapes.name}: {self.numnp} nodes, "
                f"{self.numelt} elements>")
