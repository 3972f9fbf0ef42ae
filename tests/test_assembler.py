import numpy as np
import pytest
import scipy.sparse as sp

from pyfemcore.assembly import (COOAssembler, CSCAssembler, PoissonElt, SparsityPatternError,
                                assemble_add, clear, to_dense)
from pyfemcore.core import FEMProblem
from pyfemcore.integration import GaussRule2d
from pyfemcore.utils.meshgen import mesh_block2d_P2

EMAT = np.array([[1.0, -1.0], [-1.0, 1.0]])
NELT = 6
T5 = 2 * np.eye(5) - np.eye(5, k=1) - np.eye(5, k=-1)


def chain_ids():
    return np.array([-1, 0, 1, 2, 3, 4, -1])


def assemble_chain(target):
    ids = chain_ids()
    for e in range(NELT):
        assemble_add(target, EMAT, ids[e:e + 2])
    return target


def test_dense_tridiagonal():
    K = assemble_chain(np.zeros((5, 5)))
    assert np.allclose(K, T5)


def test_coo_tridiagonal_and_csc_reassembly():
    coo = assemble_chain(COOAssembler(4, 5))
    assert coo.nentries == 18
    assert np.allclose(coo.toarray(), T5)
    csc = CSCAssembler.from_coo(coo)
    assert np.allclose(csc.toarray(), T5)
    clear(csc)
    assert csc.matrix.nnz == 13 and not csc.matrix.data.any()
    assemble_chain(csc)
    assert np.allclose(to_dense(csc), T5)


def test_coo_growth():
    coo = COOAssembler(1, 5)
    assemble_add(coo, EMAT, [0, 1])
    assert coo.capacity == 4
    assemble_add(coo, EMAT, [1, 2])
    assert coo.capacity == 8
    assemble_add(coo, np.ones((3, 3)), [2, 3, 4])
    assert coo.capacity == 17
    assert coo.nentries == 17
    clear(coo)
    assert coo.nentries == 0 and coo.capacity == 17


def test_dense_vector_skips_negative_ids():
    b = np.zeros(3)
    assemble_add(b, np.array([1.0, 2.0, 3.0]), [2, -1, 0])
    assert np.allclose(b, [3.0, 0.0, 1.0])


def test_csc_missing_slot_raises():
    csc = CSCAssembler(sp.identity(3, format="csc"))
    assemble_add(csc, np.array([[2.0]]), [1])
    assert np.allclose(csc.toarray(), np.diag([1.0, 3.0, 1.0]))
    before = csc.toarray()
    with pytest.raises(SparsityPatternError):
        assemble_add(csc, EMAT, [0, 1])
    assert np.array_equal(csc.toarray(), before)
    # a zero off-diagonal contribution has nowhere to go but is harmless
    assemble_add(csc, np.diag([1.0, 1.0]), [0, 2])
    assert csc.matrix.nnz == 3


def test_csc_accepts_unsorted_ids():
    coo = assemble_chain(COOAssembler(36, 5))
    csc = CSCAssembler.from_coo(coo)
    clear(csc)
    for e in range(NELT):
        ids = chain_ids()[e:e + 2][::-1].copy()
        assemble_add(csc, EMAT[::-1, ::-1], ids)
    assert np.allclose(csc.toarray(), T5)


def test_bad_targets_and_blocks():
    with pytest.raises(TypeError):
        assemble_add([[0.0]], EMAT, [0, 1])
    with pytest.raises(TypeError):
        clear({})
    with pytest.raises(ValueError):
        assemble_add(np.zeros((2, 2)), EMAT, [0, 1, 2])
    with pytest.raises(ValueError):
        assemble_add(np.zeros((2, 2)), EMAT, [0, 2])


def test_failed_csc_add_leaves_matrix_unchanged():
    csc = CSCAssembler(sp.csc_matrix(np.array([[1.0, 1.0], [0.0, 1.0]])))
    before = csc.toarray()
    with pytest.raises(SparsityPatternError):
        assemble_add(csc, np.ones((2, 2)), [0, 1])
    assert np.array_equal(csc.toarray(), before)
    # the scratch column is clean for the next contribution
    assemble_add(csc, np.array([[1.0, 2.0], [0.0, 3.0]]), [0, 1])
    assert np.array_equal(csc.toarray(), [[2.0, 3.0], [0.0, 4.0]])


def test_backends_assemble_the_same_problem():
    mesh = mesh_block2d_P2(2, 3)
    mesh.X[:, 12] += [0.02, -0.03]
    fe = FEMProblem(mesh, PoissonElt(), GaussRule2d(3))

    def bc(x, ids, u):
        if np.isclose(x[0], 0.0) or np.isclose(x[1], 1.0):
            ids[:] = -1
            u[:] = x[0] * x[1]

    fe.set_dirichlet(bc)
    fe.set_load(lambda x, fx: fx.__setitem__(0, 1.0 + x[0]))
    n = fe.assign_ids()

    R_dense, K_dense = fe.assemble(np.zeros(n), np.zeros((n, n)))
    R_coo, coo = fe.assemble(np.zeros(n), COOAssembler(16, n))
    csc = CSCAssembler.from_coo(coo)
    R_csc, csc = fe.assemble(np.zeros(n), csc)

    assert np.array_equal(R_dense, R_coo) and np.array_equal(R_dense, R_csc)
    assert np.allclose(coo.toarray(), K_dense, rtol=0.0, atol=1e-13)
    assert np.allclose(csc.toarray(), K_dense, rtol=0.0, atol=1e-13)
    assert np.allclose(csc.toarray(), coo.toarray(), rtol=0.0, atol=1e-13)
