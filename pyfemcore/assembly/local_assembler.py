"""pyfemcore.assembly.local_assembler
Element kernels.

An element *type* is a flyweight: it carries what is common to every element
of that kind (here nothing), while the mesh supplies which nodes a given
element touches.  The interface is

    etype.element_dR(fe, eltid, Re, Ke)

which accumulates the element residual ``Re`` and tangent ``Ke`` (either may
be ``None``).  Outputs are added to, so callers zero them first.
"""
import numpy as np

__all__ = ["PoissonElt", "element_dR"]


class PoissonElt:
    """
    Poisson equation in weak form,

        R(u, Nᵢ) = ∫_Ω ∇Nᵢ·∇u − Nᵢ f dΩ,

    written once for every reference dimension.  With ``ndof > 1`` each
    component is an independent Poisson field; local dofs are node-major
    (node ``a``, component ``c`` at ``a*ndof + c``).
    """

    def element_dR(self, fe, eltid: int, Re=None, Ke=None):
        s = fe.mesh.shapes
        eltj = fe.mesh.elt[:, eltid]
        ndof = fe.ndof
        Ue = fe.U[:, eltj].T          # (nen, ndof)
        Fe = fe.F[:, eltj].T
        for _, wt in fe.mapped_rule(eltid):
            if Re is not None:
                du = s.dN.T @ Ue      # (d, ndof)
                fx = s.N @ Fe         # (ndof,)
                Re += ((s.dN @ du - np.outer(s.N, fx)) * wt).ravel()
            if Ke is not None:
                k = wt * (s.dN @ s.dN.T)
                for c in range(ndof):
                    Ke[c::ndof, c::ndof] += k
        return Re, Ke

    def __repr__(self):
        return "PoissonElt()"


def element_dR(etype, fe, eltid: int, Re=None, Ke=None):
    """Residual/tangent contribution of element ``eltid`` for element type ``etype``."""
    return etype.element_dR(fe, eltid, Re, Ke)
