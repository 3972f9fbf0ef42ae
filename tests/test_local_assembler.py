import numpy as np

from pyfemcore.assembly import PoissonElt, element_dR
from pyfemcore.core import FEMProblem
from pyfemcore.fem.reference import get_shapes
from pyfemcore.integration import GaussRule1dv, GaussRule2d
from pyfemcore.utils.meshgen import mesh_create1d, mesh_block2d_P1


def unit_load(x, fx):
    fx[:] = 1.0


def test_p1_element_stiffness_and_load():
    fe = FEMProblem(mesh_create1d(6, get_shapes("1dP1")), PoissonElt(), GaussRule1dv(2))
    fe.set_load(unit_load)
    Re, Ke = np.zeros(2), np.zeros((2, 2))
    fe.element_dR(0, Re, Ke)
    assert np.allclose(Ke, 6.0 * np.array([[1.0, -1.0], [-1.0, 1.0]]))
    assert np.allclose(Re, [-1 / 12, -1 / 12])


def test_residual_is_tangent_times_u_for_zero_load():
    fe = FEMProblem(mesh_block2d_P1(1, 1), PoissonElt(), GaussRule2d(2))
    fe.U[0] = [0.3, -1.0, 2.0, 0.5]
    Re, Ke = np.zeros(4), np.zeros((4, 4))
    element_dR(fe.etype, fe, 0, Re, Ke)
    # Ke is in local element order
    assert np.allclose(Re, Ke @ fe.U[0, fe.mesh.elt[:, 0]])
    assert np.allclose(Ke, Ke.T)
    assert np.allclose(Ke.sum(axis=1), 0.0)


def test_outputs_accumulate_and_may_be_none():
    fe = FEMProblem(mesh_create1d(2, get_shapes("1dP1")), PoissonElt(), GaussRule1dv(2))
    Ke = np.zeros((2, 2))
    fe.element_dR(0, None, Ke)
    fe.element_dR(0, None, Ke)
    assert np.allclose(Ke, 4.0 * np.array([[1.0, -1.0], [-1.0, 1.0]]))
    Re = np.zeros(2)
    assert fe.element_dR(1, Re, None)[1] is None


def test_two_components_are_independent_and_node_major():
    fe = FEMProblem(mesh_create1d(1, get_shapes("1dP1")), PoissonElt(), GaussRule1dv(2), ndof=2)
    Ke = np.zeros((4, 4))
    fe.element_dR(0, None, Ke)
    k = np.array([[1.0, -1.0], [-1.0, 1.0]])
    assert np.allclose(Ke[0::2, 0::2], k)
    assert np.allclose(Ke[1::2, 1::2], k)
    assert np.allclose(Ke[0::2, 1::2], 0.0)
