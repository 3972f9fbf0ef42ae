"""pyfemcore.core.problem
Finite element problem: mesh, element type, quadrature and nodal fields.
"""
import logging
from typing import Callable, Optional

import numpy as np

from pyfemcore.assembly import global_matrix
from pyfemcore.integration.mapped import IsoMappedRule

logger = logging.getLogger(__name__)

__all__ = ["FEMProblem"]


class FEMProblem:
    """
    Owns the mesh, the element type (flyweight), the reference quadrature
    rule and the nodal arrays, all ``(ndof, numnp)``:

    * ``U``: current solution, prescribed values included,
    * ``F``: nodal load values,
    * ``id``: reduced-system map: negative for constrained cells, otherwise
      (after ``assign_ids``) the zero-based position in the reduced vector.

    Lifecycle: mark boundary cells (``set_dirichlet``) and loads
    (``set_load``), call ``assign_ids`` once, then ``assemble`` as often as
    needed and ``update_U`` with the solution of ``K du = R``.
    """

    def __init__(self, mesh, etype, qrule, ndof: int = 1):
        if qrule.dim != mesh.shapes.dim:
            raise ValueError(f"{qrule!r} is {qrule.dim}-d but {mesh.shapes.name} is "
                             f"{mesh.shapes.dim}-d")
        self.mesh = mesh
        self.etype = etype
        self.qrule = qrule
        self.ndof = ndof
        numnp = mesh.numnp
        self.U = np.zeros((ndof, numnp))
        self.F = np.zeros((ndof, numnp))
        self.id = np.zeros((ndof, numnp), dtype=np.int64)
        self.nactive = numnp * ndof
        self._ids_assigned = False
        self._rule = IsoMappedRule(qrule, mesh.shapes, map_grads=True)

    # ---------------------------------------------------------------- setup
    def set_dirichlet(self, bc: Callable):
        """Call ``bc(x, ids, u)`` per node with views of its ``X``, ``id`` and ``U`` columns."""
        X = self.mesh.X
        for j in range(self.mesh.numnp):
            bc(X[:, j], self.id[:, j], self.U[:, j])

    def set_load(self, f: Callable):
        """Call ``f(x, fx)`` per node with a view of its ``F`` column."""
        X = self.mesh.X
        for j in range(self.mesh.numnp):
            f(X[:, j], self.F[:, j])

    def assign_ids(self) -> int:
        """Number the non-negative ``id`` cells node by node; returns ``nactive``."""
        if self._ids_assigned:
            raise RuntimeError("assign_ids() has already been called for this problem")
        cells = self.id.T                      # node-major traversal
        active = cells >= 0
        self.nactive = int(active.sum())
        cells[active] = np.arange(self.nactive)
        self._ids_assigned = True
        logger.debug("assigned %d of %d dofs to the reduced system",
                     self.nactive, self.id.size)
        return self.nactive

    # ------------------------------------------------------------- elements
    def element_ids(self, eltid: int, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Reduced ids of element ``eltid``, node-major."""
        ids = self.id[:, self.mesh.elt[:, eltid]].ravel(order="F")
        if out is None:
            return ids
        out[:] = ids
        return out

    def mapped_rule(self, eltid: int) -> IsoMappedRule:
        """The problem's isoparametric rule bound to element ``eltid``."""
        self._rule.xnodal = self.mesh.element_coords(eltid)
        return self._rule

    def element_dR(self, eltid: int, Re=None, Ke=None):
        return self.etype.element_dR(self, eltid, Re, Ke)

    # ------------------------------------------------------------- global
    def assemble(self, R=None, K=None):
        """Rebuild the reduced residual and/or tangent from ``U`` and ``F``."""
        if not self._ids_assigned:
            raise RuntimeError("call assign_ids() before assemble()")
        return global_matrix.assemble(self, R, K)

    def update_U(self, du_red):
        """``U -= du`` on every active cell (Newton-style correction)."""
        du_red = np.asarray(du_red, dtype=float).reshape(-1)
        if du_red.shape[0] != self.nactive:
            raise ValueError(f"update has {du_red.shape[0]} entries, expected {self.nactive}")
        active = self.id >= 0
        self.U[active] -= du_red[self.id[active]]
        return self.U

    def __repr__(self):
        return (f"<FEMProblem {self.etype!r} on {self.mesh!r}, ndof={self.ndof}, "
                f"nactive={self.nactive}>")
