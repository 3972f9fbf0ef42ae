"""pyfemcore.integration.mapped
Quadrature on mapped (spatial) domains.

Under a positively oriented map χ from the reference domain Ω₀ onto Ωₑ,

    ∫_Ωₑ f dx ≈ Σⱼ f(χ(ξⱼ)) det J(ξⱼ) wⱼ .

``point(i)`` maps the reference point and factors the Jacobian; ``weight(i)``
reuses that factorization, so the point step must come first (iteration
always does).  Re-evaluating ``point(i)`` is harmless.
"""
from typing import Callable, Optional

import numpy as np

from pyfemcore.fem import transform
from pyfemcore.fem.transform import jacobian_scratch, r2s_det, r2s_factor
from pyfemcore.integration.quadrature import QuadratureRule

__all__ = ["MappedRule", "IsoMappedRule"]


class _MappedBase(QuadratureRule):

    def __init__(self, base_rule: QuadratureRule):
        self.base_rule = base_rule
        self.J, self.ipiv = jacobian_scratch(base_rule.dim)
        self._x = np.zeros(base_rule.dim)

    def _base_point(self, i):
        x = self.base_rule.point(i)
        if np.ndim(x) == 0:
            # scalar 1-d rules still map through a vector
            self._x[0] = x
            x = self._x
        return x

    @property
    def dim(self):
        return self.base_rule.dim

    @property
    def npoints(self):
        return self.base_rule.npoints

    def r2s_gradients(self, g):
        """Map extra reference gradients with the cached factorization."""
        return transform.r2s_gradients(self.J, self.ipiv, g)

    def detJ(self) -> float:
        return r2s_det(self.J, self.ipiv)

    def weight(self, i, map=False):
        if map:
            self.point(i)
        return self.base_rule.weight(i) * transform.check_orientation(self.detJ())


class MappedRule(_MappedBase):
    """Rule mapped by a user function ``chi(x, J)`` that overwrites ``x``
    with its spatial image and fills ``J``."""

    def __init__(self, base_rule: QuadratureRule, chi: Callable):
        super().__init__(base_rule)
        self.chi = chi

    def point(self, i):
        x = self._base_point(i)
        self.chi(x, self.J)
        r2s_factor(self.J, self.ipiv)
        return x


class IsoMappedRule(_MappedBase):
    """
    Isoparametric rule: χ(ξ) = Σᵢ xᵢ Nᵢ(ξ) with nodal points ``xnodal``
    (``d x nen``).  With ``map_grads`` the family's ``dN`` holds spatial
    gradients after every ``point`` call.  ``xnodal`` may be rebound between
    elements so a single rule serves a whole mesh.
    """

    def __init__(self, base_rule: QuadratureRule, shapes, xnodal: Optional[np.ndarray] = None,
                 map_grads: bool = False):
        super().__init__(base_rule)
        self.shapes = shapes
        self.xnodal = xnodal
        self.map_grads = map_grads

    def point(self, i):
        x = self._base_point(i)
        transform.isoparametric(self.shapes, self.xnodal, x, self.J)
        r2s_factor(self.J, self.ipiv)
        if self.map_grads:
            self.r2s_gradients(self.shapes)
        return x
