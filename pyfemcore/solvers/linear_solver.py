"""pyfemcore.solvers.linear_solver
Direct solve of the reduced system and a one-shot linear driver.
"""
import logging
import time

import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla

from pyfemcore.assembly.assembler import COOAssembler, CSCAssembler

logger = logging.getLogger(__name__)

__all__ = ["solve", "solve_linear"]


def solve(K, R) -> np.ndarray:
    """Return ``du`` with ``K du = R`` for any assembler target."""
    R = np.asarray(R, dtype=float)
    if isinstance(K, COOAssembler):
        K = K.to_csc()
    elif isinstance(K, CSCAssembler):
        K = K.matrix
    if sp.issparse(K):
        return np.atleast_1d(spla.spsolve(sp.csc_matrix(K), R))
    if isinstance(K, np.ndarray):
        return np.linalg.solve(K, R)
    raise TypeError(f"cannot solve with {type(K).__name__}")


def _allocate(fe, matrix: str):
    n = fe.nactive
    if matrix == "dense":
        return np.zeros((n, n))
    nalloc = fe.mesh.numelt * (fe.mesh.nen * fe.ndof) ** 2
    if matrix == "coo":
        return COOAssembler(nalloc, n)
    if matrix == "csc":
        coo = COOAssembler(nalloc, n)
        fe.assemble(K=coo)
        return CSCAssembler.from_coo(coo)
    raise ValueError(f"unknown matrix storage {matrix!r} (dense, coo, csc)")


def solve_linear(fe, matrix: str = "dense"):
    """
    Assemble, solve and update ``fe.U`` once.  Exact for linear problems;
    ``assign_ids`` must already have been called.
    """
    t0 = time.perf_counter()
    R = np.zeros(fe.nactive)
    K = _allocate(fe, matrix)
    fe.assemble(R, K)
    du = solve(K, R)
    fe.update_U(du)
    logger.debug("linear solve (%s, %d dofs) in %.3g s, |R| = %.3e",
                 matrix, fe.nactive, time.perf_counter() - t0, np.linalg.norm(R))
    return fe
