from .linear_solver import solve, solve_linear
__all__ = ['solve', 'solve_linear']
