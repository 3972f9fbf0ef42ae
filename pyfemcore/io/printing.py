"""pyfemcore.io.printing
Plain-text dumps of meshes and FE problems for debugging.
"""
import sys

__all__ = ["mesh_print_nodes", "mesh_print_elt", "mesh_print", "fem_print"]


def _out(file):
    return sys.stdout if file is None else file


def mesh_print_nodes(mesh, file=None):
    out = _out(file)
    print("--- Nodes ---", file=out)
    for j in range(mesh.numnp):
        coords = " ".join(f"{v:12.6g}" for v in mesh.X[:, j])
        print(f"{j:6d}: {coords}", file=out)


def mesh_print_elt(mesh, file=None):
    out = _out(file)
    print("--- Elements ---", file=out)
    for e in range(mesh.numelt):
        nodes = " ".join(f"{n:6d}" for n in mesh.elt[:, e])
        print(f"{e:6d}: {nodes}", file=out)


def mesh_print(mesh, file=None):
    """Node table followed by the connectivity table."""
    mesh_print_nodes(mesh, file)
    mesh_print_elt(mesh, file)


def fem_print(fe, file=None):
    """Per node: coordinates, then ``id``, ``U`` and ``F`` for every dof."""
    out = _out(file)
    mesh = fe.mesh
    print(f"--- FEM problem: {mesh.numnp} nodes, {mesh.numelt} elements, "
          f"ndof={fe.ndof}, nactive={fe.nactive} ---", file=out)
    for j in range(mesh.numnp):
        coords = " ".join(f"{v:10.4g}" for v in mesh.X[:, j])
        dofs = "  ".join(f"[{fe.id[c, j]:4d}] {fe.U[c, j]:12.6g} {fe.F[c, j]:12.6g}"
                         for c in range(fe.ndof))
        print(f"{j:6d}: {coords} | {dofs}", file=out)
    mesh_print_elt(mesh, out)
