from .printing import mesh_print_nodes, mesh_print_elt, mesh_print, fem_print
__all__ = ['mesh_print_nodes', 'mesh_print_elt', 'mesh_print', 'fem_print']
