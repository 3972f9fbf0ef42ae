from .mesh import Mesh
from .problem import FEMProblem
__all__ = ['Mesh', 'FEMProblem']
