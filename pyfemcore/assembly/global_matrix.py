"""pyfemcore.assembly.global_matrix"""
import logging

import numpy as np

from pyfemcore.assembly.assembler import assemble_add, clear

logger = logging.getLogger(__name__)


def _check_target(name, target, shape):
    if target is not None and tuple(target.shape) != shape:
        raise ValueError(f"{name} has shape {tuple(target.shape)}, expected {shape}")


def assemble(fe, R=None, K=None):
    """
    Assemble the reduced residual ``R`` and/or tangent ``K`` of ``fe``.

    Both are cleared first and rebuilt from the current ``fe.U`` and ``fe.F``;
    ids < 0 are dropped by the assembler, which eliminates Dirichlet dofs.
    """
    if R is None and K is None:
        raise ValueError("nothing to assemble: pass R, K or both")
    n = fe.nactive
    _check_target("R", R, (n,))
    _check_target("K", K, (n, n))

    nlocal = fe.mesh.nen * fe.ndof
    Re = np.zeros(nlocal) if R is not None else None
    Ke = np.zeros((nlocal, nlocal)) if K is not None else None
    ids = np.zeros(nlocal, dtype=np.int64)

    if R is not None:
        clear(R)
    if K is not None:
        clear(K)

    for eltid in range(fe.mesh.numelt):
        fe.element_ids(eltid, out=ids)
        if Re is not None:
            Re[:] = 0.0
        if Ke is not None:
            Ke[:, :] = 0.0
        fe.element_dR(eltid, Re, Ke)
        if R is not None:
            assemble_add(R, Re, ids)
        if K is not None:
            assemble_add(K, Ke, ids)

    logger.debug("assembled %d elements into %d reduced dofs (K: %s)",
                 fe.mesh.numelt, n, type(K).__name__ if K is not None else None)
    return R, K
