"""pyfemcore.io.visualization"""
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection

__all__ = ["plot_mesh"]


def _plot_mesh_1d(mesh, solution_on_nodes, plot_nodes, ax):
    x = mesh.X[0]
    order = np.argsort(x)
    if solution_on_nodes is not None:
        u = np.asarray(solution_on_nodes, dtype=float).reshape(-1)
        if u.shape[0] != mesh.numnp:
            raise ValueError("Length of solution_on_nodes must match the number of mesh nodes.")
    else:
        u = np.zeros(mesh.numnp)
    ax.plot(x[order], u[order], '-', color='navy', linewidth=1.2, zorder=2)
    if plot_nodes:
        ax.plot(x, u, 'o', color='deepskyblue', markersize=3, zorder=3, linestyle='None')
    ax.set_xlabel("X-coordinate")
    ax.set_ylabel("Solution Value" if solution_on_nodes is not None else "")
    return ax


def plot_mesh(mesh, *, solution_on_nodes=None, plot_nodes=True, show=True, ax=None):
    """
    Plot a mesh of any shape family.

    Args:
        mesh (Mesh): The mesh to plot. Element outlines use the corner nodes of
                     its shape family.
        solution_on_nodes (np.ndarray, optional): Nodal values shown as a filled
                     contour (2D) or as the plotted curve (1D).
        plot_nodes (bool, optional): If True, plots all nodes as points.
        show (bool, optional): If True, calls plt.show() at the end.
        ax (matplotlib.axes.Axes, optional): An existing axes object to plot on.
    Returns:
        matplotlib.axes.Axes: The axes object containing the plot.
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 8))

    if mesh.dim == 1:
        _plot_mesh_1d(mesh, solution_on_nodes, plot_nodes, ax)
        ax.set_title("Mesh Visualization")
        if show:
            plt.show()
        return ax

    X = mesh.X
    corners = list(mesh.shapes.corners)

    # --- element outlines ---
    polys = [X[:, mesh.elt[corners, e]].T for e in range(mesh.numelt)]
    ax.add_collection(PolyCollection(polys, facecolors='none', edgecolors='black',
                                     linewidths=0.9, zorder=2))

    # --- nodes, corners drawn on top ---
    if plot_nodes:
        corner_gids = np.unique(mesh.elt[corners, :])
        ho_gids = np.setdiff1d(np.arange(mesh.numnp), corner_gids)
        if ho_gids.size:
            ax.plot(X[0, ho_gids], X[1, ho_gids], 'o', color='deepskyblue', markersize=2,
                    zorder=3, label="Higher-Order Nodes", linestyle='None')
        ax.plot(X[0, corner_gids], X[1, corner_gids], 'o', color='navy', markersize=4,
                zorder=4, label="Corner Nodes", linestyle='None')
        if ho_gids.size:
            ax.legend()

    # --- solution contour ---
    if solution_on_nodes is not None:
        u = np.asarray(solution_on_nodes, dtype=float).reshape(-1)
        if u.shape[0] != mesh.numnp:
            raise ValueError("Length of solution_on_nodes must match the number of mesh nodes.")
        contour = ax.tricontourf(X[0], X[1], u, levels=14, cmap='viridis', zorder=0, alpha=0.8)
        plt.colorbar(contour, ax=ax, label="Solution Value")

    ax.set_aspect('equal', 'box')
    xmin, ymin = X.min(axis=1)
    xmax, ymax = X.max(axis=1)
    xpad = (xmax - xmin) * 0.05 or 0.1
    ypad = (ymax - ymin) * 0.05 or 0.1
    ax.set_xlim(xmin - xpad, xmax + xpad)
    ax.set_ylim(ymin - ypad, ymax + ypad)
    ax.set_title("Mesh Visualization")
    ax.set_xlabel("X-coordinate")
    ax.set_ylabel("Y-coordinate")

    if show:
        plt.show()

    return ax
