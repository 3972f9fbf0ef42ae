"""pyfemcore.fem.reference.lagrange
Symbolic generators for the nodal bases (SymPy expressions).
"""
import sympy as sp

# (ix, iy) indices into the 1D node list, counter-clockwise from (-1,-1)
P1_PAIRS = ((0, 0), (1, 0), (1, 1), (0, 1))
P2_PAIRS = ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2), (1, 2), (0, 2), (0, 1), (1, 1))


def _equispaced(n: int):
    return [sp.Rational(2 * k, n) - 1 for k in range(n + 1)]


def lagrange_1d(x, n: int):
    """Degree-``n`` Lagrange polynomials on equispaced nodes of [-1, 1]."""
    nodes = _equispaced(n)
    L = []
    for i, xi in enumerate(nodes):
        num = sp.S(1)
        den = sp.S(1)
        for j, xj in enumerate(nodes):
            if i == j:
                continue
            num *= (x - xj)
            den *= (xi - xj)
        L.append(sp.expand(num / den))
    return L


def tensor_lagrange(xi, eta, n: int, pairs):
    """Tensor-product Q_n basis in the node order given by ``pairs``."""
    Lx = lagrange_1d(xi, n)
    Ly = lagrange_1d(eta, n)
    return [sp.expand(Lx[a] * Ly[b]) for a, b in pairs]


def serendipity_quad(xi, eta):
    """8-node serendipity quadrilateral (P2 node order without the centre)."""
    nodes = _equispaced(2)
    N = []
    for a, b in P2_PAIRS[:8]:
        xa, ya = nodes[a], nodes[b]
        if xa != 0 and ya != 0:
            N.append(sp.Rational(1, 4) * (1 + xi * xa) * (1 + eta * ya) * (xi * xa + eta * ya - 1))
        elif xa == 0:
            N.append(sp.Rational(1, 2) * (1 - xi**2) * (1 + eta * ya))
        else:
            N.append(sp.Rational(1, 2) * (1 + xi * xa) * (1 - eta**2))
    return [sp.expand(f) for f in N]


def linear_triangle(xi, eta):
    """Barycentric P1 triangle on (0,0)-(1,0)-(0,1)."""
    return [1 - xi - eta, xi, eta]
