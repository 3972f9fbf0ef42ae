"""pyfemcore.integration.quadrature
Reference-domain quadrature rules: 1-D Gauss-Legendre (1-10 points), tensor
product Gauss on [-1,1]², and the 3-point mid-side (Hughes) triangle rule.
"""
import numpy as np
from numpy.polynomial.legendre import leggauss

__all__ = ["MAX_GAUSS_POINTS", "gauss_point", "gauss_weight", "gauss2d_point",
           "gauss2d_weight", "hughes_point", "hughes_weight", "QuadratureRule",
           "GaussRule1d", "GaussRule1dv", "GaussRule2d", "HughesRule2d"]

MAX_GAUSS_POINTS = 10

# -------------------------------------------------------------------------
# 1-D Gauss-Legendre table (exact for degree ≤ 2p-1)
# -------------------------------------------------------------------------
_GAUSS_TABLE = {p: leggauss(p) for p in range(1, MAX_GAUSS_POINTS + 1)}


def _gauss_rule(npts: int):
    try:
        return _GAUSS_TABLE[npts]
    except KeyError:
        raise ValueError(f"Gauss rule with {npts} points not tabulated "
                         f"(1..{MAX_GAUSS_POINTS})") from None


def _check_index(i: int, npts: int):
    if not 0 <= i < npts:
        raise IndexError(f"point {i} out of range for a {npts}-point rule")


def gauss_point(i: int, npts: int) -> float:
    pts, _ = _gauss_rule(npts)
    _check_index(i, npts)
    return float(pts[i])


def gauss_weight(i: int, npts: int) -> float:
    _, wts = _gauss_rule(npts)
    _check_index(i, npts)
    return float(wts[i])


# -------------------------------------------------------------------------
# 2-D helpers
# -------------------------------------------------------------------------
def _npts1(npts: int) -> int:
    n1 = int(round(np.sqrt(npts)))
    if n1 * n1 != npts:
        raise ValueError(f"tensor Gauss rule needs a square point count, got {npts}")
    return n1


def gauss2d_point(xi, i: int, npts: int):
    """Write tensor Gauss point ``i`` of an ``npts``-point rule into ``xi``."""
    n1 = _npts1(npts)
    ix, iy = i % n1, i // n1
    xi[0] = gauss_point(ix, n1)
    xi[1] = gauss_point(iy, n1)
    return xi


def gauss2d_weight(i: int, npts: int) -> float:
    n1 = _npts1(npts)
    ix, iy = i % n1, i // n1
    return gauss_weight(ix, n1) * gauss_weight(iy, n1)


_HUGHES_POINTS = ((0.5, 0.0), (0.5, 0.5), (0.0, 0.5))


def hughes_point(xi, i: int):
    """Edge mid-point ``i`` of the unit triangle, written into ``xi``."""
    _check_index(i, 3)
    xi[0], xi[1] = _HUGHES_POINTS[i]
    return xi


def hughes_weight(i: int) -> float:
    _check_index(i, 3)
    return 1.0 / 6


# -------------------------------------------------------------------------
# Rule objects
# -------------------------------------------------------------------------
class QuadratureRule:
    """
    Finite, restartable sequence of ``(point, weight)`` pairs.

    Subclasses provide ``npoints``, ``dim``, ``point(i)`` and ``weight(i)``.
    Vector points are written into scratch owned by the rule, so a point is
    only valid until the next ``point`` call on the same rule.
    """
    dim = 1

    @property
    def npoints(self) -> int:
        raise NotImplementedError

    def point(self, i):
        raise NotImplementedError

    def weight(self, i) -> float:
        raise NotImplementedError

    def pointwt(self, i):
        x = self.point(i)
        return x, self.weight(i)

    def __len__(self):
        return self.npoints

    def __iter__(self):
        for i in range(self.npoints):
            yield self.pointwt(i)


class GaussRule1d(QuadratureRule):
    """Gauss-Legendre on [-1, 1] with scalar points."""

    def __init__(self, npts: int):
        _gauss_rule(npts)
        self.npts = npts

    @property
    def npoints(self):
        return self.npts

    def point(self, i):
        return gauss_point(i, self.npts)

    def weight(self, i):
        return gauss_weight(i, self.npts)

    def __repr__(self):
        return f"GaussRule1d({self.npts})"


class GaussRule1dv(GaussRule1d):
    """Gauss-Legendre on [-1, 1] with points as length-1 vectors."""

    def __init__(self, npts: int):
        super().__init__(npts)
        self.xi = np.zeros(1)

    def point(self, i):
        self.xi[0] = gauss_point(i, self.npts)
        return self.xi

    def __repr__(self):
        return f"GaussRule1dv({self.npts})"


class GaussRule2d(QuadratureRule):
    """``npts1 x npts1`` tensor Gauss rule on [-1, 1]²."""
    dim = 2

    def __init__(self, npts1: int):
        _gauss_rule(npts1)
        self.npts1 = npts1
        self.xi = np.zeros(2)

    @property
    def npoints(self):
        return self.npts1 * self.npts1

    def point(self, i):
        ix, iy = i % self.npts1, i // self.npts1
        self.xi[0] = gauss_point(ix, self.npts1)
        self.xi[1] = gauss_point(iy, self.npts1)
        return self.xi

    def weight(self, i):
        ix, iy = i % self.npts1, i // self.npts1
        return gauss_weight(ix, self.npts1) * gauss_weight(iy, self.npts1)

    def __repr__(self):
        return f"GaussRule2d({self.npts1})"


class HughesRule2d(QuadratureRule):
    """Mid-side rule on the unit triangle; exact for total degree ≤ 2."""
    dim = 2

    def __init__(self):
        self.xi = np.zeros(2)

    @property
    def npoints(self):
        return 3

    def point(self, i):
        return hughes_point(self.xi, i)

    def weight(self, i):
        return hughes_weight(i)

    def __repr__(self):
        return "HughesRule2d()"
