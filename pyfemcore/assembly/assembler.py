"""pyfemcore.assembly.assembler
Scatter element contributions into the reduced global system.

    clear(target)                   zero the values, keep the structure
    assemble_add(target, emat, ids) add emat[i, j] at (ids[i], ids[j])

Entries touching a negative id are skipped; that is how Dirichlet-eliminated
dofs drop out of the reduced system.  Targets are dense ``numpy`` arrays
(matrix or vector), ``COOAssembler`` and ``CSCAssembler``.
"""
import logging

import numba
import numpy as np
import scipy.sparse as sp

logger = logging.getLogger(__name__)

__all__ = ["SparsityPatternError", "COOAssembler", "CSCAssembler", "clear",
           "assemble_add", "to_dense"]


class SparsityPatternError(ValueError):
    """A contribution targets a slot absent from a fixed CSC pattern."""


# -------------------------------------------------------------------------
# kernels
# -------------------------------------------------------------------------
@numba.njit(cache=True)
def _dense_add_mat(A, emat, ids):
    nids = ids.shape[0]
    for j in range(nids):
        if ids[j] < 0:
            continue
        for i in range(nids):
            if ids[i] >= 0:
                A[ids[i], ids[j]] += emat[i, j]


@numba.njit(cache=True)
def _dense_add_vec(b, evec, ids):
    for i in range(ids.shape[0]):
        if ids[i] >= 0:
            b[ids[i]] += evec[i]


@numba.njit(cache=True)
def _coo_add(I, J, V, nentries, emat, ids):
    nids = ids.shape[0]
    for j in range(nids):
        if ids[j] < 0:
            continue
        for i in range(nids):
            if ids[i] >= 0:
                I[nentries] = ids[i]
                J[nentries] = ids[j]
                V[nentries] = emat[i, j]
                nentries += 1
    return nentries


@numba.njit(cache=True)
def _csc_add(indptr, indices, data, scratch, rows, emat, ids, write):
    """
    Column-by-column merge into a fixed CSC pattern.  ``rows`` are the sorted
    unique non-negative ids.  Returns the number of nonzero contributions
    that found no slot; with ``write`` false only that count is computed and
    ``data`` is left untouched.
    """
    nids = ids.shape[0]
    nrows = rows.shape[0]
    missing = 0
    for j in range(nids):
        col = ids[j]
        if col < 0:
            continue
        for i in range(nids):
            if ids[i] >= 0:
                scratch[ids[i]] += emat[i, j]
        k = indptr[col]
        kn = indptr[col + 1]
        for p in range(nrows):
            r = rows[p]
            while k < kn and indices[k] < r:
                k += 1
            if k < kn and indices[k] == r:
                if write:
                    data[k] += scratch[r]
                k += 1
            elif scratch[r] != 0.0:
                missing += 1
            scratch[r] = 0.0
    return missing


# -------------------------------------------------------------------------
# helpers
# -------------------------------------------------------------------------
def _prepare(emat, ids, shape):
    ids = np.asarray(ids, dtype=np.int64).reshape(-1)
    emat = np.ascontiguousarray(emat, dtype=float)
    nids = ids.shape[0]
    if emat.shape[0] != nids or (emat.ndim == 2 and emat.shape[1] != nids):
        raise ValueError(f"local block {emat.shape} does not match {nids} ids")
    if nids and ids.max() >= min(shape):
        raise ValueError(f"id {ids.max()} out of range for global shape {shape}")
    return emat, ids


# -------------------------------------------------------------------------
# coordinate form
# -------------------------------------------------------------------------
class COOAssembler:
    """
    Growable (row, col, value) triples for an ``m x n`` matrix.  Duplicates
    are only summed by ``to_csc``.
    """

    def __init__(self, nalloc: int, m: int, n: int = 0):
        self.I = np.zeros(nalloc, dtype=np.int64)
        self.J = np.zeros(nalloc, dtype=np.int64)
        self.V = np.zeros(nalloc)
        self.nentries = 0
        self.m = m
        self.n = n if n > 0 else m

    @property
    def shape(self):
        return (self.m, self.n)

    @property
    def capacity(self) -> int:
        return self.V.shape[0]

    def clear(self):
        self.nentries = 0

    def _reserve(self, nnew_entries: int):
        nold = self.capacity
        if self.nentries + nnew_entries <= nold:
            return
        nnew = max(self.nentries + nnew_entries, 2 * nold)
        logger.debug("COOAssembler: growing storage %d -> %d", nold, nnew)
        for name in ("I", "J", "V"):
            old = getattr(self, name)
            new = np.zeros(nnew, dtype=old.dtype)
            new[:self.nentries] = old[:self.nentries]
            setattr(self, name, new)

    def assemble_add(self, emat, ids):
        emat, ids = _prepare(emat, ids, self.shape)
        if emat.ndim != 2:
            raise TypeError("COOAssembler only accumulates matrices")
        self._reserve(ids.shape[0] ** 2)
        self.nentries = _coo_add(self.I, self.J, self.V, self.nentries, emat, ids)

    def to_csc(self) -> sp.csc_matrix:
        n = self.nentries
        A = sp.csc_matrix((self.V[:n], (self.I[:n], self.J[:n])), shape=self.shape)
        A.sum_duplicates()
        return A

    def toarray(self) -> np.ndarray:
        return self.to_csc().toarray()

    def __repr__(self):
        return f"<COOAssembler {self.m}x{self.n}: {self.nentries}/{self.capacity} entries>"


# -------------------------------------------------------------------------
# fixed-pattern compressed sparse column
# -------------------------------------------------------------------------
class CSCAssembler:
    """
    Accumulate into an existing CSC matrix without changing its pattern.

    A dense column scratch of length ``nrows`` collects one local column at a
    time; it is merged into the stored slots and only the touched entries are
    reset.  A nonzero contribution without a slot raises
    ``SparsityPatternError`` before any value is changed.
    """

    def __init__(self, matrix):
        A = sp.csc_matrix(matrix, dtype=float, copy=True)
        A.sum_duplicates()
        self.matrix = A
        self.scratch = np.zeros(A.shape[0])

    @classmethod
    def from_coo(cls, coo: COOAssembler) -> "CSCAssembler":
        """Pattern from an assembled COO pass (values are kept)."""
        A = coo.to_csc()
        logger.debug("CSCAssembler: pattern with %d nonzeros from %d COO entries",
                     A.nnz, coo.nentries)
        return cls(A)

    @property
    def shape(self):
        return self.matrix.shape

    def clear(self):
        self.matrix.data[:] = 0.0

    def assemble_add(self, emat, ids):
        emat, ids = _prepare(emat, ids, self.shape)
        if emat.ndim != 2:
            raise TypeError("CSCAssembler only accumulates matrices")
        rows = np.unique(ids[ids >= 0])
        A = self.matrix
        # check every slot before touching the values
        missing = _csc_add(A.indptr, A.indices, A.data, self.scratch, rows, emat, ids, False)
        if missing:
            raise SparsityPatternError(
                f"{missing} contribution(s) for ids {ids.tolist()} fall outside the sparsity pattern")
        _csc_add(A.indptr, A.indices, A.data, self.scratch, rows, emat, ids, True)

    def toarray(self) -> np.ndarray:
        return self.matrix.toarray()

    def __repr__(self):
        return f"<CSCAssembler {self.shape[0]}x{self.shape[1]}: nnz={self.matrix.nnz}>"


# -------------------------------------------------------------------------
# generic interface
# -------------------------------------------------------------------------
def clear(target):
    if isinstance(target, np.ndarray):
        target[...] = 0.0
    elif isinstance(target, (COOAssembler, CSCAssembler)):
        target.clear()
    else:
        raise TypeError(f"cannot assemble into {type(target).__name__}")
    return target


def assemble_add(target, emat, ids):
    if isinstance(target, np.ndarray):
        emat, ids = _prepare(emat, ids, target.shape)
        if target.ndim == 1 and emat.ndim == 1:
            _dense_add_vec(target, emat, ids)
        elif target.ndim == 2 and emat.ndim == 2:
            _dense_add_mat(target, emat, ids)
        else:
            raise ValueError(f"cannot add a {emat.ndim}-d block into a {target.ndim}-d array")
    elif isinstance(target, (COOAssembler, CSCAssembler)):
        target.assemble_add(emat, ids)
    else:
        raise TypeError(f"cannot assemble into {type(target).__name__}")
    return target


def to_dense(target) -> np.ndarray:
    if isinstance(target, np.ndarray):
        return target.copy()
    if isinstance(target, (COOAssembler, CSCAssembler)):
        return target.toarray()
    if sp.issparse(target):
        return target.toarray()
    raise TypeError(f"cannot densify {type(target).__name__}")
