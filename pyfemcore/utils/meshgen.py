"""pyfemcore.utils.meshgen
Mesh generators for quick tests: 1D intervals and unit-square blocks.

Nodes are numbered row by row from the SW corner to the NE corner; element
connectivity follows the node order of the shape family and every element
is positively oriented.
"""
import logging

import numba
import numpy as np

from pyfemcore.core.mesh import Mesh
from pyfemcore.fem.reference import get_shapes

logger = logging.getLogger(__name__)

__all__ = ["mesh_create1d", "mesh_block2d_P1", "mesh_block2d_P2",
           "mesh_block2d_S2", "mesh_block2d_T1"]


def mesh_create1d(numelt: int, shapes, a: float = 0.0, b: float = 1.0) -> Mesh:
    """``numelt`` equal elements on [a, b] for any 1D family."""
    if shapes.dim != 1:
        raise ValueError(f"mesh_create1d needs a 1-d family, got {shapes.name}")
    nen = shapes.nshapes
    numnp = numelt * (nen - 1) + 1
    mesh = Mesh.empty(shapes, numnp, numelt)
    mesh.X[0, :] = np.linspace(a, b, numnp)
    for j in range(numelt):
        mesh.elt[:, j] = j * (nen - 1) + np.arange(nen)
    return mesh


def _grid_nodes(nx: int, ny: int) -> np.ndarray:
    x = np.linspace(0.0, 1.0, nx)
    y = np.linspace(0.0, 1.0, ny)
    X, Y = np.meshgrid(x, y)          # row iy holds y[iy]
    return np.vstack([X.ravel(), Y.ravel()])


# -------------------------------------------------------------------------
# connectivity kernels
# -------------------------------------------------------------------------
@numba.jit(nopython=True, cache=True)
def _block_p1_elt(nex, ney):
    elt = np.empty((4, nex * ney), dtype=np.int64)
    for iy in range(ney):
        for ix in range(nex):
            i = ix + iy * nex
            sw = ix + iy * (nex + 1)
            elt[0, i] = sw
            elt[1, i] = sw + 1
            elt[2, i] = sw + 1 + nex + 1
            elt[3, i] = sw + nex + 1
    return elt


@numba.jit(nopython=True, cache=True)
def _block_p2_elt(nex, ney):
    nx = 2 * nex + 1
    elt = np.empty((9, nex * ney), dtype=np.int64)
    for iy in range(ney):
        for ix in range(nex):
            i = ix + iy * nex
            sw = 2 * ix + 2 * iy * nx
            elt[0, i] = sw
            elt[1, i] = sw + 1
            elt[2, i] = sw + 2
            elt[3, i] = sw + 2 + nx
            elt[4, i] = sw + 2 + 2 * nx
            elt[5, i] = sw + 1 + 2 * nx
            elt[6, i] = sw + 2 * nx
            elt[7, i] = sw + nx
            elt[8, i] = sw + 1 + nx
    return elt


@numba.jit(nopython=True, cache=True)
def _block_s2_elt(nex, ney):
    nx0 = 2 * nex + 1        # full rows
    nx1 = nex + 1            # mid-side rows
    elt = np.empty((8, nex * ney), dtype=np.int64)
    for iy in range(ney):
        for ix in range(nex):
            i = ix + iy * nex
            sw = 2 * ix + iy * (nx0 + nx1)
            ww = ix + iy * (nx0 + nx1) + nx0
            nw = 2 * ix + (iy + 1) * (nx0 + nx1)
            elt[0, i] = sw
            elt[1, i] = sw + 1
            elt[2, i] = sw + 2
            elt[3, i] = ww + 1
            elt[4, i] = nw + 2
            elt[5, i] = nw + 1
            elt[6, i] = nw
            elt[7, i] = ww
    return elt


@numba.jit(nopython=True, cache=True)
def _block_t1_elt(nex, ney):
    elt = np.empty((3, 2 * nex * ney), dtype=np.int64)
    for iy in range(ney):
        for ix in range(nex):
            i = ix + iy * nex
            sw = ix + iy * (nex + 1)
            # two triangles per square
            elt[0, 2 * i] = sw
            elt[1, 2 * i] = sw + 1
            elt[2, 2 * i] = sw + nex + 1
            elt[0, 2 * i + 1] = sw + nex + 1
            elt[1, 2 * i + 1] = sw + 1
            elt[2, 2 * i + 1] = sw + 1 + nex + 1
    return elt


# -------------------------------------------------------------------------
# block meshers on [0,1]²
# -------------------------------------------------------------------------
def mesh_block2d_P1(nex: int, ney: int) -> Mesh:
    mesh = Mesh(get_shapes("2dP1"), _grid_nodes(nex + 1, ney + 1), _block_p1_elt(nex, ney))
    logger.debug("block mesh %r", mesh)
    return mesh


def mesh_block2d_P2(nex: int, ney: int) -> Mesh:
    mesh = Mesh(get_shapes("2dP2"), _grid_nodes(2 * nex + 1, 2 * ney + 1),
                _block_p2_elt(nex, ney))
    logger.debug("block mesh %r", mesh)
    return mesh


def mesh_block2d_S2(nex: int, ney: int) -> Mesh:
    nx0, nx1 = 2 * nex + 1, nex + 1
    numnp = (ney + 1) * nx0 + ney * nx1
    X = np.zeros((2, numnp))
    for iy in range(ney + 1):
        start = iy * (nx0 + nx1)
        X[0, start:start + nx0] = np.linspace(0.0, 1.0, nx0)
        X[1, start:start + nx0] = iy / ney
        if iy < ney:
            start += nx0
            X[0, start:start + nx1] = np.linspace(0.0, 1.0, nx1)
            X[1, start:start + nx1] = (iy + 0.5) / ney
    mesh = Mesh(get_shapes("2dS2"), X, _block_s2_elt(nex, ney))
    logger.debug("block mesh %r", mesh)
    return mesh


def mesh_block2d_T1(nex: int, ney: int) -> Mesh:
    mesh = Mesh(get_shapes("2dT1"), _grid_nodes(nex + 1, ney + 1), _block_t1_elt(nex, ney))
    logger.debug("block mesh %r", mesh)
    return mesh
