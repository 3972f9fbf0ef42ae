import io

import matplotlib.pyplot as plt
import numpy as np
import pytest

from pyfemcore.assembly import PoissonElt
from pyfemcore.core import FEMProblem
from pyfemcore.fem.reference import get_shapes
from pyfemcore.integration import GaussRule1dv
from pyfemcore.io import fem_print, mesh_print
from pyfemcore.io.visualization import plot_mesh
from pyfemcore.utils.meshgen import mesh_block2d_P2, mesh_block2d_T1, mesh_create1d


def test_mesh_print_to_stdout(capsys):
    mesh_print(mesh_block2d_T1(1, 1))
    out = capsys.readouterr().out
    assert "--- Nodes ---" in out and "--- Elements ---" in out
    # header lines plus 4 nodes and 2 elements
    assert len(out.strip().splitlines()) == 2 + 4 + 2


def test_fem_print_to_stream():
    fe = FEMProblem(mesh_create1d(2, get_shapes("1dP1")), PoissonElt(), GaussRule1dv(2))
    fe.id[0, 0] = -1
    fe.assign_ids()
    buf = io.StringIO()
    fem_print(fe, file=buf)
    text = buf.getvalue()
    assert "nactive=2" in text
    assert "[  -1]" in text and "[   1]" in text


def test_plot_mesh_2d():
    mesh = mesh_block2d_P2(2, 2)
    u = mesh.X[0] + mesh.X[1]
    ax = plot_mesh(mesh, solution_on_nodes=u, show=False)
    assert len(ax.collections) >= 1
    with pytest.raises(ValueError):
        plot_mesh(mesh, solution_on_nodes=u[:-1], show=False)
    plt.close("all")


def test_plot_mesh_1d():
    mesh = mesh_create1d(4, get_shapes("1dP2"))
    ax = plot_mesh(mesh, solution_on_nodes=np.sin(mesh.X[0]), show=False)
    assert len(ax.lines) == 2
    plt.close("all")
