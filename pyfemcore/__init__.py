"""pyfemcore: finite element assembly kernel for the Poisson equation in 1D and 2D."""
__version__ = "0.1.0"
