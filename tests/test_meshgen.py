import numpy as np
import pytest

from pyfemcore.fem.reference import get_shapes
from pyfemcore.utils.meshgen import (mesh_create1d, mesh_block2d_P1, mesh_block2d_P2,
                                     mesh_block2d_S2, mesh_block2d_T1)
from pyfemcore.core import Mesh


@pytest.mark.parametrize("name, numnp", [("1dP1", 7), ("1dP2", 13), ("1dP3", 19)])
def test_create1d(name, numnp):
    mesh = mesh_create1d(6, get_shapes(name))
    assert mesh.numnp == numnp and mesh.numelt == 6
    assert np.allclose(mesh.X[0], np.linspace(0.0, 1.0, numnp))
    nen = mesh.nen
    assert mesh.elt[:, 1].tolist() == list(range(nen - 1, 2 * nen - 1))


def test_create1d_interval_and_dimension_check():
    mesh = mesh_create1d(2, get_shapes("1dP1"), a=-1.0, b=3.0)
    assert np.allclose(mesh.X[0], [-1.0, 1.0, 3.0])
    with pytest.raises(ValueError):
        mesh_create1d(2, get_shapes("2dP1"))


def test_block_p1():
    mesh = mesh_block2d_P1(3, 2)
    assert mesh.numnp == 12 and mesh.numelt == 6
    assert np.allclose(mesh.X[:, 5], [1 / 3, 0.5])
    assert mesh.elt.T.tolist() == [[0, 1, 5, 4], [1, 2, 6, 5], [2, 3, 7, 6],
                                   [4, 5, 9, 8], [5, 6, 10, 9], [6, 7, 11, 10]]


def test_block_p2():
    mesh = mesh_block2d_P2(3, 2)
    assert mesh.numnp == 35 and mesh.numelt == 6
    assert mesh.elt[:, 0].tolist() == [0, 1, 2, 9, 16, 15, 14, 7, 8]
    assert mesh.elt[:, 4].tolist() == [16, 17, 18, 25, 32, 31, 30, 23, 24]
    assert np.allclose(mesh.X[:, 8], [1 / 6, 0.25])


def test_block_s2():
    mesh = mesh_block2d_S2(3, 2)
    assert mesh.numnp == 29 and mesh.numelt == 6
    assert mesh.elt[:, 0].tolist() == [0, 1, 2, 8, 13, 12, 11, 7]
    # top row is filled
    assert np.allclose(mesh.X[:, 22:], [np.linspace(0, 1, 7), np.ones(7)])
    assert np.allclose(mesh.X[:, 7:11], [np.linspace(0, 1, 4), np.full(4, 0.25)])


def test_block_t1():
    mesh = mesh_block2d_T1(3, 2)
    assert mesh.numnp == 12 and mesh.numelt == 12
    assert mesh.elt[:, 0].tolist() == [0, 1, 4]
    assert mesh.elt[:, 1].tolist() == [4, 1, 5]


@pytest.mark.parametrize("mesher", [mesh_block2d_P1, mesh_block2d_P2,
                                    mesh_block2d_S2, mesh_block2d_T1])
def test_block_elements_positively_oriented(mesher):
    mesh = mesher(3, 2)
    area = 0.0
    for e in range(mesh.numelt):
        xy = mesh.X[:, mesh.elt[list(mesh.shapes.corners), e]]
        # shoelace over the corner polygon
        a = 0.5 * np.sum(xy[0] * np.roll(xy[1], -1) - np.roll(xy[0], -1) * xy[1])
        assert a > 0
        area += a
    assert np.isclose(area, 1.0)
    assert isinstance(mesh, Mesh)
